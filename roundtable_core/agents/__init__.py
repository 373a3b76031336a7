"""对话 Agent：圆桌模式与单助手模式。"""
