"""
Service context extraction for logging.

Identifies the running process in every log line so that output from several
workers behind one load balancer can be told apart.
"""

import os
import socket
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'catalog')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Containers expose a short hostname; locally the PID is more useful
    hostname = os.getenv('HOSTNAME', '')
    if hostname and deploy_env != 'local_dev':
        instance = hostname[:12]
    else:
        instance = f'{socket.gethostname()[:12]}-{os.getpid()}'

    return f'{service_name}@{deploy_env}:{instance}'
