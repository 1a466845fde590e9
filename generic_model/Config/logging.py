from __future__ import annotations

import os
from typing import Dict, Any

# Default logging configuration
default = 'stderr'

channels: Dict[str, Dict[str, Any]] = {
    'stderr': {
        'driver': 'stderr',
        'level': os.getenv('LOG_LEVEL', 'warning'),
        'format': '[%(asctime)s] %(levelname)s in %(name)s: %(message)s',
        'date_format': '%Y-%m-%d %H:%M:%S',
    },

    'null': {
        'driver': 'null',
        'level': 'critical',
    },
}

# Default logging level
level = os.getenv('LOG_LEVEL', 'warning')
