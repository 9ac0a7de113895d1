"""Infrastructure 层 - 持久化等外部依赖的适配器"""
