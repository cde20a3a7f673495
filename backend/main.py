"""
FastAPI Backend for Career AI Advisor

Provides REST API endpoints for:
- Sign in / sign up / sign out through Supabase auth
- The 16-question career quiz and its AI analysis
- The career advisor chat
- Career information search
- Dashboard progress

Client state lives in a workspace per browser session. The session id is
issued by POST /api/sessions and addresses the workspace in later paths.
"""

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Optional, List, Dict, Any
import os
import sys
import time
import logging

# Add the career_advisor package to Python path (lib imports it)
backend_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(backend_dir)
package_src = os.path.join(project_root, 'career_advisor', 'src')
if os.path.exists(package_src) and package_src not in sys.path:
    sys.path.insert(0, package_src)

# Setup enhanced logging with pretty formatting
from lib.logger import setup_logging, get_logger
from lib.auth import create_workspace, get_advisor, get_settings, get_workspace, require_user, shutdown_advisor

settings = get_settings()
setup_logging(level=getattr(logging, settings.log_level, logging.INFO), use_colors=True)

logger = get_logger("backend.main")

from supabase import AuthError

from career_advisor.advisor import CareerAdvisor, Workspace
from career_advisor.quiz_flow import InvalidAnswerError, QuizCompletedError

app = FastAPI(
    title="Career AI Advisor API",
    description="Career quiz, AI career advisor chat and career search",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ==================== Pydantic Models ====================

class Credentials(BaseModel):
    email: str
    password: str


class QuizAnswer(BaseModel):
    answer: str


class ChatInput(BaseModel):
    content: str


class CareerSearch(BaseModel):
    query: str


class SessionResponse(BaseModel):
    user: Optional[Dict[str, Any]]
    authenticated: bool
    loading: bool


class NewSessionResponse(SessionResponse):
    session_id: str


class CareerInfoResponse(BaseModel):
    query: str
    content: Optional[str]


class ProgressResponse(BaseModel):
    quizzes_taken: int
    skills_identified: int
    recommended_paths: List[str]


# ==================== API Endpoints ====================

@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "Career AI Advisor API",
        "version": "1.0.0",
    }


@app.post("/api/careers/search", response_model=CareerInfoResponse)
async def search_career(search: CareerSearch, advisor: CareerAdvisor = Depends(get_advisor)):
    """Career information lookup. Blank queries return no content."""
    start_time = time.time()
    content = await advisor.search_career(search.query)
    logger.response(200, "/api/careers/search", duration=time.time() - start_time, data={
        "query": search.query[:50],
        "searched": content is not None,
    })
    return CareerInfoResponse(query=search.query, content=content)


@app.post("/api/sessions", response_model=NewSessionResponse, status_code=201)
async def open_session(workspace: Workspace = Depends(create_workspace)):
    """Issue a session id for a new browser session."""
    return {"session_id": workspace.workspace_id, **workspace.session.state.to_dict()}


@app.get("/api/sessions/{session_id}/auth", response_model=SessionResponse)
async def get_session(workspace: Workspace = Depends(get_workspace)):
    return workspace.session.state.to_dict()


@app.post("/api/sessions/{session_id}/auth/signin", response_model=SessionResponse)
async def sign_in(credentials: Credentials, workspace: Workspace = Depends(get_workspace)):
    try:
        await workspace.session.sign_in(credentials.email, credentials.password)
    except AuthError as e:
        logger.warning("Sign-in rejected", data={"email": credentials.email, "error": str(e)})
        raise HTTPException(status_code=401, detail=str(e))
    return workspace.session.state.to_dict()


@app.post("/api/sessions/{session_id}/auth/signup", response_model=SessionResponse)
async def sign_up(credentials: Credentials, workspace: Workspace = Depends(get_workspace)):
    try:
        await workspace.session.sign_up(credentials.email, credentials.password)
    except AuthError as e:
        logger.warning("Sign-up rejected", data={"email": credentials.email, "error": str(e)})
        raise HTTPException(status_code=400, detail=str(e))
    return workspace.session.state.to_dict()


@app.post("/api/sessions/{session_id}/auth/signout", response_model=SessionResponse)
async def sign_out(workspace: Workspace = Depends(get_workspace), advisor: CareerAdvisor = Depends(get_advisor)):
    """End the session and close its workspace. The session id is no longer valid."""
    await workspace.session.sign_out()
    await advisor.close_workspace(workspace.workspace_id)
    return workspace.session.state.to_dict()


@app.get("/api/sessions/{session_id}/quiz")
async def get_quiz(workspace: Workspace = Depends(require_user)):
    return workspace.quiz.to_dict()


@app.post("/api/sessions/{session_id}/quiz/answer")
async def answer_quiz(answer: QuizAnswer, workspace: Workspace = Depends(require_user)):
    """
    Answer the current quiz question.
    The response to the last answer carries the career analysis.
    """
    try:
        await workspace.quiz.answer(answer.answer)
    except InvalidAnswerError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except QuizCompletedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return workspace.quiz.to_dict()


@app.post("/api/sessions/{session_id}/quiz/restart")
async def restart_quiz(workspace: Workspace = Depends(require_user)):
    return workspace.start_quiz().to_dict()


@app.get("/api/sessions/{session_id}/chat/messages")
async def get_chat_messages(workspace: Workspace = Depends(require_user)):
    return workspace.chat.to_dict()


@app.post("/api/sessions/{session_id}/chat/messages")
async def send_chat_message(message: ChatInput, workspace: Workspace = Depends(require_user)):
    """
    Send a message to the career advisor.
    Blank messages and sends while a reply is pending are ignored.
    """
    start_time = time.time()
    logger.request("POST", "/chat/messages", workspace_id=workspace.workspace_id, data={
        "message_length": len(message.content),
    })

    reply = await workspace.chat.send(message.content)

    logger.response(200, "/chat/messages", duration=time.time() - start_time, data={
        "replied": reply is not None,
    })
    return workspace.chat.to_dict()


@app.get("/api/sessions/{session_id}/progress", response_model=ProgressResponse)
async def get_progress(workspace: Workspace = Depends(require_user)):
    """Dashboard counters computed from the user's saved quiz results."""
    summary = await workspace.progress()
    return summary.to_dict()


@app.on_event("shutdown")
async def shutdown_event():
    """Let pending persistence tasks settle."""
    await shutdown_advisor()
    logger.info("🛑 Workspaces closed")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
