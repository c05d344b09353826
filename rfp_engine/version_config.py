# RFP Suite Store Version Configuration
# Central source of truth for version information

import re

RFP_STORE_VERSION = "1.3.0"


def get_version_string() -> str:
    """Get the full version string (e.g., 'v1.3.0')"""
    return f"v{RFP_STORE_VERSION}"


def validate_version_format(version: str) -> bool:
    """Validate that a version string follows semantic versioning"""
    pattern = r'^v?\d+\.\d+\.\d+(-[a-zA-Z0-9-]+)?(\+[a-zA-Z0-9-]+)?$'
    return bool(re.match(pattern, version))


if not validate_version_format(RFP_STORE_VERSION):
    raise ValueError(f"Invalid version format: {RFP_STORE_VERSION}")
