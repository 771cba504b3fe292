from habitat_layout.server import create_app
from habitat_layout.settings import load_settings

app = create_app(load_settings())

if __name__ == "__main__":
    settings = app.config["HABITAT_SETTINGS"]
    app.run(host=settings.host, port=settings.port, debug=settings.debug, use_reloader=False)
