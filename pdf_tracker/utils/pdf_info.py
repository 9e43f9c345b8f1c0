import logging
import os

from pypdf import PdfReader

logger = logging.getLogger(__name__)

def read_page_count(pdf_path):
    """
    读取 PDF 总页数，仅作展示用途

    Args:
        pdf_path (str): 已保存的 PDF 文件路径

    Returns:
        int | None: 页数；文件不存在或无法解析时返回 None
    """
    # 检查输入文件是否存在
    if not os.path.exists(pdf_path):
        logger.warning(f"PDF 文件不存在: {pdf_path}")
        return None

    try:
        reader = PdfReader(pdf_path)
        return len(reader.pages)
    except Exception as e:
        # 上传只校验 Content-Type，内容可能不是合法 PDF
        logger.warning(f"读取 PDF 页数失败: {pdf_path}: {e}")
        return None
