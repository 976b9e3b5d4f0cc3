from snapshortener.utils.config import app_env, app_name, project_root, app_prefix, load_config
from snapshortener.utils.helpers import base_url, get_short_url, guarantee_500_response
from snapshortener.utils.shortener import generate_shortcode, generate_id
from snapshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'generate_id',
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'base_url',
    'get_short_url',
    'guarantee_500_response',
    'initialize_logging',
]
