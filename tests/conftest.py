import os


os.environ.setdefault("PARAM_CHECKER_ENVIRONMENT", "testing")
os.environ.setdefault("PARAM_CHECKER_LOG_LEVEL", "WARNING")
