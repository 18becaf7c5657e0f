import os
from portfolio import create_app
from portfolio.extensions import store

# 从环境变量获取配置模式
# 支持 FLASK_ENV 或 FLASK_CONFIG
config_name = os.getenv('FLASK_ENV') or os.getenv('FLASK_CONFIG') or 'default'
if config_name in ('development', 'dev'):
    config_name = 'development'

app = create_app(config_name)

@app.shell_context_processor
def make_shell_context():
    """
    配置 Flask Shell 上下文。
    允许在命令行中使用 'flask shell' 时直接访问 store 和 app。
    """
    return dict(app=app, store=store, data=store.get_data())

if __name__ == '__main__':
    port = int(os.getenv('PORT', 4000))
    print("-------------------------------------------------------")
    print("   PORTFOLIO CONTENT SERVER STARTING                   ")
    print(f"   Target: 0.0.0.0:{port}                              ")
    print("-------------------------------------------------------")
    app.run(host='0.0.0.0', port=port)
