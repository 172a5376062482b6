"""Default configuration content."""

from metacast.config.schema import GlobalConfig

DEFAULT_GLOBAL_CONFIG = GlobalConfig()


def get_default_config_content() -> str:
    """Get default metacast.yaml content with comments."""
    return """# Metacast Configuration

version: "1"

# Logging level: DEBUG, INFO, WARNING, ERROR
log_level: INFO

# Record store (talks, people, scope overrides) and generated feeds
data_dir: data
out_dir: out

ingest:
  collection: general-conference
  id_prefix: gc
  # Pause between talk page requests (seconds)
  request_delay_seconds: 1.0
  timeout_seconds: 30
  # What a failed talk fetch does to numbering:
  #   compact - the next talk takes the failed talk's sequence number
  #   reserve - the failed talk's sequence number is left unused
  failed_talk_policy: compact
  honorifics:
    - Sister
    - Elder
    - President
    - Bishop
    - Brother

feeds:
  base_url: https://joeskeen.github.io/gospel-metacasts
  default_image: assets/logo.png
  owner_email: no-reply@example.com
  category: Religion & Spirituality

probe:
  timeout_seconds: 60
  max_attempts: 2
"""
