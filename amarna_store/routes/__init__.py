"""HTTP 路由（Flask blueprints）。"""
