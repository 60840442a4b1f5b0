from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from ..errors import ConfigurationError, InputError, PersistenceError
from ..schemas import WaitlistRequest
from ..services.waitlist import TOOL_OPTIONS, WaitlistStatus, WaitlistWriter

router = APIRouter()


def _failure(status_code: int, title: str, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "title": title, "error": error})


@router.get("/waitlist/tools")
async def list_tools():
    return {"tools": list(TOOL_OPTIONS)}


@router.post("/waitlist")
async def join_waitlist(payload: WaitlistRequest, request: Request):
    writer: WaitlistWriter = request.app.state.waitlist
    try:
        status = await run_in_threadpool(writer.submit, payload.email, payload.tool)
    except InputError as exc:
        return _failure(400, "Missing Information", str(exc))
    except ConfigurationError as exc:
        return _failure(503, "Configuration Error", str(exc))
    except PersistenceError:
        return _failure(500, "Something went wrong", "Please try again later.")

    if status is WaitlistStatus.ALREADY_JOINED:
        return {
            "success": True,
            "status": status.value,
            "title": "Already on the waitlist!",
            "message": "This email is already registered. We'll notify you when your tool is ready.",
        }
    return {
        "success": True,
        "status": status.value,
        "title": "You're on the waitlist!",
        "message": "We'll notify you when your tool is ready.",
    }
