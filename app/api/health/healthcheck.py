from fastapi import APIRouter, status
from app.utility.response import api_response

router = APIRouter(
    prefix="/health",
    tags=["Health"]
)


@router.get(
    "/alive",
    summary="Health Check",
    description="Return data about whether server is live",
    responses={
        200: {
            "description": "When server is alive",
            "content": {
                "application/json": {
                    "example": {"statusCode": 200, "message": "OK", "data": {"alive": True}, "success": True}
                }
            }
        }
    }
)
async def healthcheck():
    return api_response(status.HTTP_200_OK, "OK", {"alive": True})
