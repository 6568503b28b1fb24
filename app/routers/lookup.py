from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.dependencies import LoggerDep, LookupDep
from app.exceptions.custom import MissingCallerPhoneError
from app.routers.elevenlabs import read_json_body
from app.schemas.responses import LookupResponse

router = APIRouter()


@router.post("/lookup", response_model=LookupResponse)
async def lookup(request: Request, service: LookupDep, log: LoggerDep):
    log = log.getChild("lookup")
    body = await read_json_body(request, log)
    phone = body.get("phone")
    if phone is not None and not isinstance(phone, str):
        phone = str(phone)

    try:
        result = await service.lookup(phone)
    except MissingCallerPhoneError:
        return JSONResponse(status_code=400, content={"error": "Missing phone"})
    except Exception:
        log.exception("Lookup error")
        return JSONResponse(status_code=500, content={"error": "Server error"})

    return result
