"""Application 层 - 用例与编排服务"""
