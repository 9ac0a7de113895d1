"""API 依赖注入"""
