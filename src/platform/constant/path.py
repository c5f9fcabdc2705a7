from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

LOG_DIR = BASE_DIR / 'logs'

# Sample events and members loaded at startup when SEED_SAMPLE_DATA is set
SEED_DATA_DIR = BASE_DIR / 'src' / 'service' / 'box_office' / 'driven_adapter' / 'seed'
