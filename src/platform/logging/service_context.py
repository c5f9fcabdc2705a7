"""
Service identification stamped onto every log line.

`SERVICE_NAME` and `DEPLOY_ENV` come from the environment; the process id
tells apart several workers of the same deployment.
"""

import os
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'box-office')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')
    hostname = os.getenv('HOSTNAME', '')
    # Containers expose a short hostname, local runs fall back to the pid
    instance = hostname[:12] if hostname else str(os.getpid())
    return f'{service_name}@{deploy_env}:{instance}'
