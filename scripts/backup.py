#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
PDF Tracker 数据备份脚本
用于备份跟踪记录 JSON 文档
"""

import sys
import os
import json
import shutil
from datetime import datetime

# 添加项目根目录到Python路径
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

BACKUP_PREFIX = 'tracking_backup_'

def backup_data(data_path, backup_dir):
    """备份跟踪数据，成功时返回备份文件路径"""
    # 检查数据文件是否存在
    if not os.path.exists(data_path):
        print(f"错误: 数据文件 {data_path} 不存在")
        return None

    # 创建备份目录
    if not os.path.exists(backup_dir):
        os.makedirs(backup_dir)
        print(f"创建备份目录: {backup_dir}")

    # 生成备份文件名
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S_%f')
    backup_filename = f"{BACKUP_PREFIX}{timestamp}.json"
    backup_path = os.path.join(backup_dir, backup_filename)

    # 执行备份
    try:
        shutil.copy2(data_path, backup_path)
        print(f"数据备份成功: {backup_path}")
        return backup_path
    except OSError as e:
        print(f"备份失败: {str(e)}")
        return None

def list_backups(backup_dir):
    """列出备份文件（最新的在前）"""
    if not os.path.exists(backup_dir):
        print(f"备份目录 {backup_dir} 不存在")
        return []

    backups = sorted(
        (f for f in os.listdir(backup_dir) if f.startswith(BACKUP_PREFIX) and f.endswith('.json')),
        reverse=True
    )
    if not backups:
        print("没有找到备份文件")
        return []

    print("备份文件列表:")
    for backup in backups:
        backup_path = os.path.join(backup_dir, backup)
        size = os.path.getsize(backup_path)
        mtime = datetime.fromtimestamp(os.path.getmtime(backup_path))
        print(f"  {backup}  (大小: {size} 字节, 修改时间: {mtime.strftime('%Y-%m-%d %H:%M:%S')})")
    return backups

def restore_data(data_path, backup_path):
    """从备份恢复跟踪数据"""
    # 检查备份文件是否存在
    if not os.path.exists(backup_path):
        print(f"错误: 备份文件 {backup_path} 不存在")
        return False

    # 恢复前确认备份是合法的 JSON 文档
    try:
        with open(backup_path, 'r', encoding='utf-8') as f:
            if not isinstance(json.load(f), dict):
                print(f"错误: 备份文件 {backup_path} 格式不正确")
                return False
    except (OSError, ValueError) as e:
        print(f"错误: 无法读取备份文件: {str(e)}")
        return False

    # 如果数据文件存在，先备份当前数据
    if os.path.exists(data_path):
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        current_backup = f"{data_path}.backup_{timestamp}"
        shutil.copy2(data_path, current_backup)
        print(f"当前数据已备份为: {current_backup}")

    # 执行恢复
    try:
        os.makedirs(os.path.dirname(os.path.abspath(data_path)), exist_ok=True)
        shutil.copy2(backup_path, data_path)
        print(f"数据恢复成功: {data_path}")
        return True
    except OSError as e:
        print(f"恢复失败: {str(e)}")
        return False

if __name__ == '__main__':
    from config import Config

    # 默认数据路径和备份目录
    default_data_path = Config.TRACKING_DATA_FILE
    default_backup_dir = 'backups'

    if len(sys.argv) < 2:
        print("用法:")
        print("  python backup.py backup [data_file] [backup_dir]  # 备份跟踪数据")
        print("  python backup.py list [backup_dir]  # 列出备份文件")
        print("  python backup.py restore <backup_file> [data_file]  # 从备份恢复跟踪数据")
        print(f"默认数据路径: {default_data_path}")
        print(f"默认备份目录: {default_backup_dir}")
        sys.exit(1)

    command = sys.argv[1]

    if command == 'backup':
        data_path = sys.argv[2] if len(sys.argv) > 2 else default_data_path
        backup_dir = sys.argv[3] if len(sys.argv) > 3 else default_backup_dir
        if not backup_data(data_path, backup_dir):
            sys.exit(1)

    elif command == 'list':
        backup_dir = sys.argv[2] if len(sys.argv) > 2 else default_backup_dir
        list_backups(backup_dir)

    elif command == 'restore':
        if len(sys.argv) < 3:
            print("请提供备份文件路径")
            sys.exit(1)

        backup_path = sys.argv[2]
        data_path = sys.argv[3] if len(sys.argv) > 3 else default_data_path
        if not restore_data(data_path, backup_path):
            sys.exit(1)

    else:
        print(f"未知命令: {command}")
        sys.exit(1)
