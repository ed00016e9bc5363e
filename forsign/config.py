import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    # Credentials
    FORSIGN_API_KEY = os.getenv('FORSIGN_API_KEY')

    # Endpoint
    FORSIGN_BASE_URL = os.getenv('FORSIGN_BASE_URL', 'https://api.forsign.digital')

    # Timeouts (seconds)
    FORSIGN_TIMEOUT = float(os.getenv('FORSIGN_TIMEOUT', 30))
    FORSIGN_CONNECT_TIMEOUT = float(os.getenv('FORSIGN_CONNECT_TIMEOUT', 10))
