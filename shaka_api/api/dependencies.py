from fastapi import Request

from shaka_api.services.shakas import ShakaService


def get_shaka_service(request: Request) -> ShakaService:
    """Service built once by the app factory"""
    return request.app.state.shaka_service
