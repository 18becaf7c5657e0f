from portfolio.store import JsonStore

# 初始化扩展对象 (暂不绑定 app)
store = JsonStore()
