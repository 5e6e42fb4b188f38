import os
from decimal import Decimal
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Base configuration - shared across all environments"""

    # Currency defaults
    DEFAULT_SOURCE_CURRENCY = os.environ.get('DEFAULT_SOURCE_CURRENCY', 'USD')
    DEFAULT_TARGET_CURRENCY = os.environ.get('DEFAULT_TARGET_CURRENCY', 'GHS')
    DEFAULT_EXCHANGE_RATE = Decimal(os.environ.get('DEFAULT_EXCHANGE_RATE', '1'))
    MAX_EXCHANGE_RATE = Decimal(os.environ.get('MAX_EXCHANGE_RATE', '1000000'))

    # Invoice settings
    INVOICE_NUMBER_PATTERN = os.environ.get('INVOICE_NUMBER_PATTERN', 'INV-{YYYY}-{MM}-{###}')
    DEFAULT_ETA_DAYS = int(os.environ.get('DEFAULT_ETA_DAYS', '90'))
    MONEY_DECIMAL_PLACES = 2

    # Logging
    BASE_DIR = os.path.dirname(os.path.abspath(__file__))
    LOGS_DIR = os.environ.get('LOGS_DIR', str(Path(BASE_DIR).resolve().parent / 'logs'))
    LOG_LEVEL = 'INFO'
    LOG_TO_FILE = True


class DevConfig(Config):
    """Development configuration"""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    """Test configuration"""
    DEBUG = False
    TESTING = True
    LOG_LEVEL = 'WARNING'
    LOG_TO_FILE = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


CONFIGS = {
    'development': DevConfig,
    'test': TestingConfig,
    'production': ProductionConfig,
}


def get_config(env=None):
    """
    Return the configuration class for an environment name.
    Falls back to INVOICER_ENV, then development.
    """
    name = (env or os.environ.get('INVOICER_ENV') or 'development').strip().lower()
    try:
        return CONFIGS[name]
    except KeyError:
        raise ValueError(f"Unknown environment '{name}'. Expected one of: {', '.join(CONFIGS)}")
