import logging

from pymongo import MongoClient, ASCENDING

logger = logging.getLogger(__name__)

_client = None
_db = None


def init_mongo(app):
    global _client, _db
    mongo_uri = app.config["MONGO_URI"]
    _client = MongoClient(mongo_uri)

    # get_default_database() extracts DB name from URI (e.g., /predictx)
    _db = _client.get_default_database(default="predictx")
    ensure_indexes(_db)

    logger.info("Connected to MongoDB database: %s", _db.name)


def ensure_indexes(database):
    database.users.create_index([("email", ASCENDING)], unique=True)
    database.bets.create_index([("user_id", ASCENDING)])
    database.bets.create_index([("event_id", ASCENDING), ("status", ASCENDING)])
    database.wallet_transactions.create_index([("user_id", ASCENDING)])
    database.notifications.create_index([("user_id", ASCENDING)])
    database.token_blocklist.create_index([("jti", ASCENDING)], unique=True)


def get_db():
    """Get the database instance. Must be called after init_mongo."""
    return _db


def get_client():
    """Get the MongoDB client instance. Must be called after init_mongo."""
    return _client


# Proxy that always resolves to the current db
class _DBProxy:
    def __getattr__(self, name):
        if _db is None:
            raise RuntimeError("Database not initialized. Call init_mongo first.")
        return getattr(_db, name)

    def __getitem__(self, name):
        if _db is None:
            raise RuntimeError("Database not initialized. Call init_mongo first.")
        return _db[name]

    def __bool__(self):
        return _db is not None


db = _DBProxy()
