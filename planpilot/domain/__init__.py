"""Domain 层 - 实体、值对象、端口与纯领域服务"""
