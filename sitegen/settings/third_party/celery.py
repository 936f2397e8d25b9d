import environ

from ..project.testing import TESTING

env = environ.FileAwareEnv()
DEVELOPMENT = env.bool("DEVELOPMENT", default=True)

CELERY_BROKER_URL = env(
    "CELERY_BROKER_URL", default="redis://localhost:6379/1"
)

if DEVELOPMENT or TESTING:
    # This makes the tasks run outside the async worker and is needed for tests
    # to pass
    CELERY_TASK_ALWAYS_EAGER = True
    CELERY_WORKER_CONCURRENCY = 2
if TESTING:
    CELERY_BROKER_URL = "memory://"
    CELERY_TASK_EAGER_PROPAGATES = True

CELERY_TASK_SERIALIZER = "json"
CELERY_ACCEPT_CONTENT = {"json"}
CELERY_WORKER_DISABLE_RATE_LIMITS = True
