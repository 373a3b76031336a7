"""配置加载（环境变量 / .env / config.yaml）。"""
