from snaproute.api import create_app
from snaproute.config import config

app = create_app()

if __name__ == '__main__':
    api_config = config.get_api_config()
    print(f"\n🚀 SnapRoute running at: http://{api_config['host']}:{api_config['port']}\n")
    app.run(**api_config)
