import pytest
from datetime import datetime, timedelta
from mongomock_motor import AsyncMongoMockClient

from specialistly.core.auth import create_access_token
from specialistly.db.mongodb import db, SLOTS, CREATORS

SPECIALIST_EMAIL = "jane@example.com"
SPECIALIST_NAME = "Jane Doe"

@pytest.fixture
def mock_db():
    """Point the shared database holder at an in-memory MongoDB."""
    client = AsyncMongoMockClient()
    db.client = client
    db.db = client["specialistdb_test"]
    yield db.db
    db.client = None
    db.db = None

@pytest.fixture
def slot_payload():
    return {
        "date": (datetime.utcnow() + timedelta(days=1)).replace(microsecond=0).isoformat(),
        "startTime": "10:00",
        "endTime": "11:00",
        "specialistEmail": SPECIALIST_EMAIL,
        "specialistName": SPECIALIST_NAME,
    }

@pytest.fixture
def booking_payload():
    return {
        "bookedBy": "64b7f0c2a1b2c3d4e5f60718",
        "customerEmail": "sam@example.com",
        "customerName": "Sam Customer",
        "serviceTitle": "Pickleball coaching",
        "googleMeetLink": "https://meet.google.com/abc-defg-hij",
        "googleEventId": "evt_123",
    }

@pytest.fixture
async def creator(mock_db):
    profile = {
        "creatorName": SPECIALIST_NAME,
        "email": SPECIALIST_EMAIL,
        "slug": "acme",
        "bio": "Pickleball coach",
        "stripeAccountId": None,
        "stripeConnectStatus": "not_connected",
        "commissionPercentage": 15,
        "createdAt": datetime.utcnow(),
    }
    result = await mock_db[CREATORS].insert_one(profile)
    profile["_id"] = result.inserted_id
    return profile

async def insert_slots(collection, count, **fields):
    """Insert `count` available slots on consecutive hours."""
    base = datetime(2026, 2, 4)
    docs = []
    for i in range(count):
        doc = {
            "date": base,
            "startTime": f"{8 + i % 12:02d}:00",
            "endTime": f"{9 + i % 12:02d}:00",
            "status": "available",
            "specialistEmail": SPECIALIST_EMAIL,
            "specialistName": SPECIALIST_NAME,
            "bookedBy": None,
            "customerEmail": None,
            "customerName": None,
            "googleMeetLink": None,
            "googleEventId": None,
            "serviceTitle": None,
        }
        doc.update(fields)
        docs.append(doc)
    result = await collection.insert_many(docs)
    return [str(_id) for _id in result.inserted_ids]

@pytest.fixture
def slots_collection(mock_db):
    return mock_db[SLOTS]

@pytest.fixture
def admin_headers():
    token = create_access_token({"sub": "admin-1", "email": "ops@example.com", "role": "admin"})
    return {"Authorization": f"Bearer {token}"}

@pytest.fixture
def specialist_headers():
    token = create_access_token({"sub": "user-1", "email": SPECIALIST_EMAIL, "role": "specialist"})
    return {"Authorization": f"Bearer {token}"}
