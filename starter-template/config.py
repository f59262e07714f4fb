import os
from dotenv import load_dotenv

load_dotenv()

IS_PRODUCTION = (
    os.getenv('ENVIRONMENT') == 'production' or
    os.getenv('FLASK_ENV') == 'production' or
    os.getenv('PRODUCTION') == '1'
)

LOG_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'databases')


class Config:
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')
    BRAND_NAME = 'Print Bee'

    # Shared admin secret and the Apps Script store
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', '')
    GAS_URL = os.getenv('GAS_URL', '')

    # Leave empty when the portal and the proxy run in this same process
    PRINTBEE_API_URL = os.getenv('PRINTBEE_API_URL', '')

    LOG_DIR = LOG_DIR
    LOG_DB = os.path.join(LOG_DIR, 'app_logs.db')

    PORT = int(os.getenv('PORT', '5000'))
