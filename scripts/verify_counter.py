#!/usr/bin/env python3
"""
Verify Counter Endpoint
连续请求两次计数接口，检查计数是否递增
"""
import sys
import logging
from pathlib import Path

import requests

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.widget.config import get_settings
from src.widget.visit_counter import CounterParseError, parse_count

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("VerifyCounter")


def read_count(url: str):
    """请求一次接口，返回计数或 None"""
    try:
        resp = requests.get(url, timeout=30)
    except requests.RequestException as e:
        logger.error(f"Request failed: {e}")
        return None

    if resp.status_code != 200:
        logger.error(f"HTTP {resp.status_code}: {resp.text[:200]}")
        return None

    try:
        return parse_count(resp.json())
    except (ValueError, CounterParseError) as e:
        logger.error(f"Bad response body: {e}")
        return None


def main() -> int:
    settings = get_settings()
    url = settings.endpoint_url
    logger.info(f"--- Testing Visit Counter ({settings.environment}) ---")

    val1 = read_count(url)
    logger.info(f"Request 1: {val1}")
    val2 = read_count(url)
    logger.info(f"Request 2: {val2}")

    if val1 is None or val2 is None:
        logger.error("❌ FAILED: endpoint did not return a count")
        return 1
    if val2 == val1 + 1:
        logger.info("✅ SUCCESS: Counter incrementing correctly.")
        return 0

    logger.warning(f"⚠️  Counter mismatch ({val1} -> {val2})")
    return 1


if __name__ == '__main__':
    sys.exit(main())
