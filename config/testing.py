from config.shift_templates import SHIFT_TEMPLATES  # noqa: F401

SECRET_KEY = "test-secret"

BURST_THRESHOLD_MINUTES = 2
STATUS_FILTER = ("Success",)
ALLOWED_EMPLOYEES = ()

EVALUATION_POLICY = "tolerant"
OVERNIGHT_SHIFT_CODE = "C"

DEBUG = False
TESTING = True
