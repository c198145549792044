from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from specialistly.core.config import settings
import logging

logger = logging.getLogger(__name__)

SLOTS = "appointmentslots"
CREATORS = "creatorprofiles"
CUSTOMERS = "customers"

# Collections wiped by the clear-db maintenance command
MAINTENANCE_COLLECTIONS = [
    "users",
    "courses",
    "services",
    CREATORS,
    CUSTOMERS,
    "websites",
    "subscriptions",
    "appointments",
    SLOTS,
]

class Database:
    client: AsyncIOMotorClient = None
    db = None

db = Database()

async def connect_to_mongo():
    """Connect to MongoDB and make sure the server is reachable."""
    try:
        logger.info("Connecting to MongoDB...")
        db.client = AsyncIOMotorClient(
            settings.MONGO_URI,
            serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
        )
        db.db = db.client[settings.DB_NAME]

        # Motor connects lazily; ping surfaces a bad URI or unreachable server now
        await db.client.admin.command("ping")
        logger.info(f"Connected to MongoDB database '{settings.DB_NAME}'.")

        await create_indexes()

    except Exception as e:
        logger.error(f"Could not connect to MongoDB: {e}")
        raise e

async def close_mongo_connection():
    """Close MongoDB connection."""
    if db.client:
        logger.info("Closing MongoDB connection...")
        db.client.close()
        db.client = None
        db.db = None
        logger.info("MongoDB connection closed.")

async def get_database():
    """Get MongoDB database instance."""
    return db.db

async def create_indexes():
    """Create indexes for collections."""
    try:
        # Appointment slots
        await db.db[SLOTS].create_index("specialistEmail")
        await db.db[SLOTS].create_index([("specialistEmail", ASCENDING), ("status", ASCENDING)])
        await db.db[SLOTS].create_index([("specialistEmail", ASCENDING), ("date", ASCENDING)])
        await db.db[SLOTS].create_index("bookedBy")

        # Creator profiles
        await db.db[CREATORS].create_index("email", unique=True)
        await db.db[CREATORS].create_index("slug", unique=True, sparse=True)

        logger.info("MongoDB indexes created successfully.")
    except Exception as e:
        logger.error(f"Failed to create MongoDB indexes: {e}")
