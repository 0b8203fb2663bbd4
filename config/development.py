import os

from config import env_list
from config.shift_templates import SHIFT_TEMPLATES  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

BURST_THRESHOLD_MINUTES = float(os.getenv("BURST_THRESHOLD_MINUTES", "2"))
STATUS_FILTER = env_list("STATUS_FILTER", "Success")
ALLOWED_EMPLOYEES = env_list("ALLOWED_EMPLOYEES")

# "strict": chỉ so ngưỡng; "tolerant": chấp nhận thiếu mốc giờ và chấm điểm chất lượng
EVALUATION_POLICY = os.getenv("EVALUATION_POLICY", "tolerant")
OVERNIGHT_SHIFT_CODE = os.getenv("OVERNIGHT_SHIFT_CODE", "C")

DEBUG = True
