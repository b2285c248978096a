"""
Centralized constants for textbatch.
All magic numbers of the batching pipeline live here.
"""

# ===========================================
# SCHEDULER
# ===========================================
DEFAULT_MAX_CONCURRENT_TRANSLATIONS = 6   # in-flight provider calls
QUEUE_BACKPRESSURE_FACTOR = 3             # pending >= ceiling * factor -> pause producers

# ===========================================
# BATCHING
# ===========================================
DEFAULT_BATCH_MAX_SIZE = 1500             # max combined characters per group
DEFAULT_BATCH_SEPARATOR = "\n\n=====\n\n"
PROVIDER_TIMEOUT_SECONDS = 60.0           # race per group translation

# ===========================================
# DISPLAY
# ===========================================
DISPLAY_MODE_REPLACE = 0
DISPLAY_MODE_BILINGUAL = 1

# ===========================================
# SPEED STATS
# ===========================================
STATS_STORAGE_KEY = "translation-speed-history"
STATS_DEFAULT_SPEED = 20                  # characters per second
STATS_MAX_TASK_RECORDS = 50
STATS_FILE = 'data/stats/speed_history.json'
STATUS_POLL_INTERVAL_SECONDS = 0.5

# ===========================================
# CACHE
# ===========================================
CACHE_MAX_ENTRIES = 5000
CACHE_TTL_SECONDS = 86400             # 24 hours

# ===========================================
# HTTP PROVIDER
# ===========================================
API_TIMEOUT_SECONDS = 120.0

# ===========================================
# LOGGING
# ===========================================
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE = 'logs/textbatch.log'
LOG_MAX_SIZE_MB = 10
LOG_BACKUP_COUNT = 5
