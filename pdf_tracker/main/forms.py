from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileRequired
from wtforms import SubmitField

class UploadForm(FlaskForm):
    # 类型只按 Content-Type 在上传处理里校验，这里不限制扩展名
    pdf = FileField('PDF 文件', validators=[FileRequired(message='No file uploaded')])
    submit = SubmitField('上传并生成链接')
