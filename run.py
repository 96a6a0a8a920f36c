#!/usr/bin/env python3
"""
Sonos SMAPI - OneDrive 网关启动脚本

使用方法:
    python run.py                    # 默认配置启动
    python run.py --port 8080        # 指定端口
    python run.py --debug            # 调试模式

环境变量:
    GATEWAY_HOST: 监听地址 (默认: 0.0.0.0)
    GATEWAY_PORT: 监听端口 (默认: 8080)
    GATEWAY_DEBUG: 调试模式 (默认: false)
    GRAPH_API_URI: Graph API 地址 (默认: https://graph.microsoft.com/v1.0/)
    AUTH_API_URI: 认证地址 (默认: https://login.microsoftonline.com/common/oauth2/v2.0/)
    GRAPH_CLIENT_ID: 应用 Client ID
    LOG_LEVEL: 日志级别 (默认: INFO)
"""
import argparse
import json
import sys
import os

# 添加项目根目录到 Python 路径
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


ENV_MAPPING = {
    "gateway": {
        "host": "GATEWAY_HOST",
        "port": "GATEWAY_PORT",
        "debug": "GATEWAY_DEBUG",
        "enable_cors": "ENABLE_CORS",
        "cors_origins": "CORS_ORIGINS",
    },
    "graph": {
        "api_uri": "GRAPH_API_URI",
        "auth_uri": "AUTH_API_URI",
        "client_id": "GRAPH_CLIENT_ID",
        "timeout": "GRAPH_TIMEOUT",
    },
    "log": {
        "level": "LOG_LEVEL",
        "format": "LOG_FORMAT",
        "file": "LOG_FILE",
    },
}


def _set_env_if_missing(key: str, value) -> None:
    if value is None or key in os.environ:
        return
    if isinstance(value, list):
        os.environ[key] = json.dumps(value)
    elif isinstance(value, bool):
        os.environ[key] = "true" if value else "false"
    else:
        os.environ[key] = str(value)


def _load_yaml_config(config_path: str) -> None:
    if not os.path.exists(config_path):
        return

    import yaml

    with open(config_path, "r", encoding="utf-8") as config_file:
        data = yaml.safe_load(config_file) or {}

    if not isinstance(data, dict):
        return

    for section, mapping in ENV_MAPPING.items():
        values = data.get(section) or {}
        for key, env_key in mapping.items():
            _set_env_if_missing(env_key, values.get(key))


def main():
    parser = argparse.ArgumentParser(
        description='Sonos SMAPI OneDrive Gateway',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--host', default=None, help='监听地址 (默认: 0.0.0.0)')
    parser.add_argument('--port', type=int, default=None, help='监听端口 (默认: 8080)')
    parser.add_argument('--config', default=None, help='配置文件路径 (默认: ./config.yaml)')
    parser.add_argument('--debug', action='store_true', help='启用调试模式')
    parser.add_argument('--reload', action='store_true', help='启用热重载')

    args = parser.parse_args()

    config_path = args.config or os.path.join(os.path.dirname(os.path.abspath(__file__)), "config.yaml")
    _load_yaml_config(config_path)

    # 命令行参数优先于配置文件
    if args.host:
        os.environ['GATEWAY_HOST'] = args.host
    if args.port:
        os.environ['GATEWAY_PORT'] = str(args.port)
    if args.debug:
        os.environ['GATEWAY_DEBUG'] = 'true'
        os.environ['LOG_LEVEL'] = 'DEBUG'

    from app.core.config import get_settings
    settings = get_settings()

    print(f"""
Sonos SMAPI OneDrive Gateway
  Python: {sys.version.split()[0]}
  Host:   {settings.gateway.host}
  Port:   {settings.gateway.port}
  Debug:  {settings.gateway.debug}
  Graph:  {settings.graph.api_uri}

SMAPI endpoints:     http://{settings.gateway.host}:{settings.gateway.port}/smapi/<operation>
App folder variant:  http://{settings.gateway.host}:{settings.gateway.port}/smapi/appfolder/<operation>

Press Ctrl+C to stop the server.
""")

    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.gateway.host,
        port=settings.gateway.port,
        reload=args.reload or settings.gateway.debug,
        log_level=settings.log.level.lower()
    )


if __name__ == '__main__':
    main()
