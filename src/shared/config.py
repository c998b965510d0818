"""Runtime settings read from the environment.

Values are read when the module is imported. Tests that need different
values patch the module attributes directly.
"""

import os

# Session tokens
JWT_SECRET = os.getenv("JWT_SECRET", "storefront-dev-secret")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRE_DAYS = int(os.getenv("JWT_EXPIRE_DAYS", "5"))
COOKIE_EXPIRE_DAYS = int(os.getenv("COOKIE_EXPIRE_DAYS", "5"))

# Password recovery
RESET_TOKEN_TTL_MINUTES = int(os.getenv("RESET_TOKEN_TTL_MINUTES", "15"))

# Catalogue browsing
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))

# Adapters: "fake" unless configured otherwise
IMAGE_STORE_ADAPTER = os.getenv("IMAGE_STORE_ADAPTER", "fake")
MAIL_ADAPTER = os.getenv("MAIL_ADAPTER", "fake")

# SMTP (used when MAIL_ADAPTER=smtp)
SMTP_HOST = os.getenv("SMTP_HOST", "localhost")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USERNAME = os.getenv("SMTP_USERNAME")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD")
SMTP_SENDER = os.getenv("SMTP_SENDER", "no-reply@storefront.local")
SMTP_USE_TLS = os.getenv("SMTP_USE_TLS", "true").lower() == "true"

