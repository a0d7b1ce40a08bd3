from __future__ import annotations
from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
import os, uuid, logging, typing as t

from fit_core.engine import AssessmentSession
from fit_core.question_bank import load_bank
from fit_core.validators import ValidationError
from fit_core.config import load_config, AUDIT_EXPORT_ENABLED
from fit_core.report_html import render_html
from fit_core.audit_export import to_json as audit_to_json, to_csv as audit_to_csv

log = logging.getLogger(__name__)

# process memory only; a session dies with the worker or on DELETE
SESS: dict[str, AssessmentSession] = {}

app = FastAPI(title="MRA Fit Assessment API")


@app.get("/")
def root():
    return {"status": "ok", "service": "mra-fit-assessment-api"}


ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
)

# ---- Schemas ----
class AnswerReq(BaseModel):
    value: str


# ---- Helpers ----
def _get(sid: str) -> AssessmentSession:
    sess = SESS.get(sid)
    if not sess:
        raise HTTPException(404, "session not found")
    return sess


def _serialize_question(sess: AssessmentSession) -> dict[str, t.Any] | None:
    q = sess.current_question()
    if q is None:
        return None
    return {
        "id": q.id,
        "section": q.section,
        "category": q.category,
        "dimension_name": q.dimension_name,
        "text": q.text,
        "options": [{"value": o.value, "label": o.label} for o in q.options],
    }


def _view(sid: str, sess: AssessmentSession, moved: bool | None = None) -> dict[str, t.Any]:
    step, total_steps = sess.step()
    prog = sess.progress()
    out: dict[str, t.Any] = {
        "session_id": sid,
        "stage": sess.stage.value,
        "step": step,
        "total_steps": total_steps,
        "question": _serialize_question(sess),
        "answer": sess.current_answer(),
        "progress": {"current": prog[0], "total": prog[1]} if prog else None,
        "can_advance": sess.can_advance(),
    }
    if moved is not None:
        out["moved"] = moved
    return out


def _results(sess: AssessmentSession) -> dict[str, t.Any]:
    view = sess.results()
    if view is None:
        raise HTTPException(409, f"results not available at stage {sess.stage.value}")
    return view.as_dict()


# ---- Health ----
@app.get("/health")
def health():
    return {"sessions": len(SESS), "audit_export": AUDIT_EXPORT_ENABLED}


# ---- Session endpoints ----
@app.post("/session/start")
def start_session():
    sid = str(uuid.uuid4())
    cfg = load_config()
    sess = AssessmentSession(bank=load_bank(cfg.get("BANK_PATH")), strict=cfg.get("STRICT_ANSWERS"))
    SESS[sid] = sess
    log.info("session %s created", sid)
    return _view(sid, sess)


@app.get("/session/{sid}")
def get_session(sid: str):
    return _view(sid, _get(sid))


@app.post("/session/{sid}/start")
def begin(sid: str):
    sess = _get(sid)
    return _view(sid, sess, moved=sess.start())


@app.post("/session/{sid}/next")
def next_(sid: str):
    sess = _get(sid)
    return _view(sid, sess, moved=sess.next())


@app.post("/session/{sid}/previous")
def previous(sid: str):
    sess = _get(sid)
    return _view(sid, sess, moved=sess.previous())


@app.post("/session/{sid}/answer")
def answer(sid: str, req: AnswerReq):
    sess = _get(sid)
    if sess.current_question() is None:
        raise HTTPException(409, f"no question to answer at stage {sess.stage.value}")
    try:
        sess.select_answer(req.value)
    except ValidationError as e:
        raise HTTPException(422, str(e))
    return _view(sid, sess)


@app.post("/session/{sid}/restart")
def restart(sid: str):
    sess = _get(sid)
    return _view(sid, sess, moved=sess.restart())


@app.delete("/session/{sid}")
def discard(sid: str):
    if SESS.pop(sid, None) is None:
        raise HTTPException(404, "session not found")
    return {"ok": True}


# ---- Results ----
@app.get("/session/{sid}/results")
def results(sid: str):
    sess = _get(sid)
    return {"session_id": sid, "combined": sess.combined().as_dict(), **_results(sess)}


@app.get("/session/{sid}/results/html")
def results_html(sid: str):
    sess = _get(sid)
    return {"html": render_html(_results(sess), session_id=sid)}


@app.get("/session/{sid}/audit.json")
def get_audit_json(sid: str):
    if not AUDIT_EXPORT_ENABLED:
        raise HTTPException(404, "audit export disabled")
    sess = _get(sid)
    return {"session_id": sid, **audit_to_json(sess.events())}


@app.get("/session/{sid}/audit.csv")
def get_audit_csv(sid: str):
    if not AUDIT_EXPORT_ENABLED:
        raise HTTPException(404, "audit export disabled")
    sess = _get(sid)
    body = audit_to_csv(sess.events())
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename=\"{sid}_audit.csv\""},
    )
