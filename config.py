"""
Configuration for the Pattern Rule Pre-filter.
"""

import os
import sys
import logging
from dotenv import load_dotenv
from typing import Dict, Any, Optional

# Load environment variables (optional - only if .env file exists)
load_dotenv()

class Config:
    """Application configuration."""

    # Logging Configuration
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    # SpaCy model settings
    SPACY_MODEL = os.environ.get('SPACY_MODEL', 'en_core_web_sm')

    # Index schema - optional YAML file overriding the shipped field names
    INDEX_SCHEMA_PATH = os.environ.get('INDEX_SCHEMA_PATH') or None

    # Rule Thresholds
    NGRAM_MIN_PROBABILITY = float(os.environ.get('NGRAM_MIN_PROBABILITY', 1e-15))

    @classmethod
    def get_language_config(cls) -> Dict[str, Any]:
        """Get language capability configuration."""
        return {
            'spacy_model': cls.SPACY_MODEL,
        }

    @classmethod
    def get_index_config(cls) -> Dict[str, Any]:
        """Get index schema configuration."""
        return {
            'schema_path': cls.INDEX_SCHEMA_PATH,
        }

    @classmethod
    def get_ngram_config(cls) -> Dict[str, Any]:
        """Get n-gram probability rule configuration."""
        return {
            'min_probability': cls.NGRAM_MIN_PROBABILITY,
        }


# For testing only
class TestingConfig(Config):
    """Testing configuration."""
    LOG_LEVEL = 'DEBUG'
    INDEX_SCHEMA_PATH = None
    NGRAM_MIN_PROBABILITY = 1e-15


def setup_logging(level: Optional[str] = None):
    """Configure application logging."""
    level_name = (level or Config.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, None)
    if not isinstance(log_level, int):
        logging.warning(f"Unknown LOG_LEVEL '{level_name}', falling back to INFO")
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format=Config.LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    # spaCy is chatty at INFO when loading pipelines
    logging.getLogger('spacy').setLevel(logging.WARNING)
