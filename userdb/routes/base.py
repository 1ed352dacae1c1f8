from fastapi import APIRouter, Request

router = APIRouter()

@router.get("/health")
def health():
    return {"status": "ok"}

@router.get("/version")
def version(request: Request):
    return {"app": request.app.title, "version": request.app.version}
