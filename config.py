import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()

class Config:
    # Basic Flask config
    SECRET_KEY = os.environ.get('SECRET_KEY', 'your-secret-key-here')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Database config
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'mysql+pymysql://user:password@db/hotspot_db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT config (admin sessions)
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY', 'your-jwt-secret-key-here')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.environ.get('JWT_EXPIRES_HOURS', '8')))

    # SMS gateway
    SMS_API_URL = os.environ.get('SMS_API_URL', 'https://lucosms-api.onrender.com/api/v1/client/send-sms')
    SMS_API_KEY = os.environ.get('SMS_API_KEY', '')
    SMS_COUNTRY_CODE = os.environ.get('SMS_COUNTRY_CODE', '256')
    SMS_TIMEOUT = float(os.environ.get('SMS_TIMEOUT', '10'))

    # SQLAlchemy pool settings
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 10,
        'pool_recycle': 3600,
        'pool_pre_ping': True
    }

class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')

class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET_KEY = 'test-secret-key-with-enough-length-for-hs256'
    SMS_API_URL = 'https://sms.test/api/v1/client/send-sms'
    SMS_API_KEY = 'test-api-key'
    BCRYPT_LOG_ROUNDS = 4

class ProductionConfig(Config):
    DEBUG = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'WARNING')
    # Production specific settings
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL')
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_size': 20,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
        'max_overflow': 10
    }

config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
