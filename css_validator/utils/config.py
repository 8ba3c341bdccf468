"""Configuration utility for CSS Validator."""

import os

# Project version
VERSION = "1.0.0"

# Default directories
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
VENDOR_DIR = os.path.join(BASE_DIR, 'vendor')

# Engine location (overridable from the environment)
JAVA_LAUNCHER = os.environ.get('CSS_VALIDATOR_JAVA', 'java')
DEFAULT_JAR_PATH = os.environ.get(
    'CSS_VALIDATOR_JAR',
    os.path.join(VENDOR_DIR, 'css-validator.jar')
)

# JVM tuning flags, roughly 50MB per engine process
JAVA_OPTS = (
    '-Xmx32m',
    '-Xms16m',
    '-XX:+UseSerialGC',
    '-Xss512k',
    '-XX:MaxMetaspaceSize=32m',
)
ENGINE_MEMORY_MB = 64

# Timeouts (in seconds), None waits forever
_timeout = os.environ.get('CSS_VALIDATOR_TIMEOUT')
ENGINE_TIMEOUT = float(_timeout) if _timeout else None

# Accepted engine arguments
VALID_PROFILES = (
    'css1', 'css2', 'css21', 'css3', 'css3svg',
    'svg', 'svgbasic', 'svgtiny', 'mobile', 'tv', 'atsc-tv',
)
DEFAULT_PROFILE = 'css3svg'

VALID_FORMATS = ('text', 'json', 'xml', 'html', 'ucn')
DEFAULT_OUTPUT_FORMAT = 'text'

# Printed by the engine when no error was found
SUCCESS_SENTINEL = "Congratulations! No Error Found"
GENERIC_INVALID_MESSAGE = "Invalid CSS"

# Transient input files
TEMP_PREFIX = 'css_validator'
TEMP_SUFFIX = '.css'

# Logging
LOG_LEVEL = os.environ.get('CSS_VALIDATOR_LOG_LEVEL', 'INFO')

# Exported config
__all__ = [
    'VERSION', 'BASE_DIR', 'VENDOR_DIR',
    'JAVA_LAUNCHER', 'DEFAULT_JAR_PATH', 'JAVA_OPTS', 'ENGINE_MEMORY_MB',
    'ENGINE_TIMEOUT',
    'VALID_PROFILES', 'DEFAULT_PROFILE', 'VALID_FORMATS', 'DEFAULT_OUTPUT_FORMAT',
    'SUCCESS_SENTINEL', 'GENERIC_INVALID_MESSAGE',
    'TEMP_PREFIX', 'TEMP_SUFFIX',
    'LOG_LEVEL',
]
