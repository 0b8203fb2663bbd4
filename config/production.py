import os

from config import env_list
from config.shift_templates import SHIFT_TEMPLATES  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

BURST_THRESHOLD_MINUTES = float(os.getenv("BURST_THRESHOLD_MINUTES", "2"))
STATUS_FILTER = env_list("STATUS_FILTER", "Success")
ALLOWED_EMPLOYEES = env_list("ALLOWED_EMPLOYEES")

EVALUATION_POLICY = os.getenv("EVALUATION_POLICY", "strict")
OVERNIGHT_SHIFT_CODE = os.getenv("OVERNIGHT_SHIFT_CODE", "C")

DEBUG = False
