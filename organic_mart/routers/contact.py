"""
Contact form submissions.
"""
import logging

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..config.database import get_database
from ..errors import guarded_write
from ..models.shop import ContactMessageDocument
from ..schemas import ContactMessageResponse, ContactRequest
from ..utils.serializers import serialize_doc, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Contact"])


@router.post("/contacts", status_code=201, response_model=ContactMessageResponse)
async def send_message(body: ContactRequest, db: AsyncIOMotorDatabase = Depends(get_database)):
    message = ContactMessageDocument(**body.model_dump(), created_at=utcnow())
    message_doc = message.to_document()

    async with guarded_write("contacts", "create", body.model_dump()):
        result = await db.contacts.insert_one(message_doc)

    logger.info("Contact message received: %s", result.inserted_id)
    return serialize_doc(await db.contacts.find_one({"_id": result.inserted_id}))
