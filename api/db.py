"""
Counter store for the local function endpoint
计数存放在 site_stats 集合中，每个计数一个文档
"""
import os
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from dotenv import load_dotenv
from pathlib import Path

# Load env vars from project root
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

COUNTER_COLLECTION = "site_stats"

_client = None


def get_db() -> Database:
    """Counter database, one client per process"""
    global _client
    if _client is None:
        _client = MongoClient(os.environ.get('MONGODB_URI', 'mongodb://localhost:27017/'))
    return _client[os.environ.get('MONGODB_DATABASE', 'resume_counter')]


def get_counter_collection() -> Collection:
    """获取计数集合"""
    return get_db()[COUNTER_COLLECTION]
