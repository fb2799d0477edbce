"""MongoDB storage for examcraft."""

from examcraft.infra.mongo.client import MongoClient
from examcraft.infra.mongo.repositories import MongoFlashcardRepository

__all__ = ["MongoClient", "MongoFlashcardRepository"]
