from fastapi import APIRouter


router = APIRouter(tags=["Health"])


@router.get("/health", summary="Service liveness")
def health() -> dict[str, str]:
    return {"status": "ok"}
