from dotenv import load_dotenv

# Load .env before the settings singleton is created
load_dotenv()

from server import server  # noqa: E402

server_app = server.handler
