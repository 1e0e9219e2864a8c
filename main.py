from app.main import app
from app.ratchakitcha import config
from app.ratchakitcha.config_validation import validate_runtime_config
from app.ratchakitcha.utils import log_line

if __name__ == "__main__":
    # Refuse to serve without a bearer secret. The hosting environment may
    # provide PORT; default to 3000 for local development.
    validate_runtime_config("web")
    log_line(f"Server running at http://localhost:{config.PORT}")
    app.run(host="0.0.0.0", port=config.PORT, threaded=True)
