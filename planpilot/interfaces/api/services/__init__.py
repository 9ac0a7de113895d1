"""API 层服务"""
