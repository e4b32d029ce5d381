"""Configure test environment."""

import os
import sys
from pathlib import Path
from dotenv import load_dotenv

# Add the project directory to the Python path
project_dir = Path(__file__).parent
sys.path.insert(0, str(project_dir))

# Keep boto3 away from real credentials and the Lambda detection helpers
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-2")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.pop("AWS_LAMBDA_FUNCTION_NAME", None)
os.environ.pop("AWS_EXECUTION_ENV", None)

os.environ["APP_ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "DEBUG"

# Load overrides from .env.test when present
env_file = project_dir / '.env.test'
if env_file.exists():
    load_dotenv(env_file, override=True)
