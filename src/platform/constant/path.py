import os
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[3]

# Tests redirect hourly log files through TEST_LOG_DIR
LOG_DIR = Path(os.environ.get('TEST_LOG_DIR') or PROJECT_ROOT / 'logs')
