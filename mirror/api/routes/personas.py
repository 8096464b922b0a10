# mirror/api/routes/personas.py
from fastapi import APIRouter

from mirror.services.persona_service import list_personas, lookup

router = APIRouter(prefix="/api/v1/personas", tags=["페르소나"])

@router.get("")
def get_personas():
    """사용 가능한 페르소나 목록"""
    return [
        {
            "key": key,
            "role": lookup(key).role,
            "voiceSample": lookup(key).voice_sample,
        }
        for key in list_personas()
    ]
