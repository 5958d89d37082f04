from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from helloworld.accounts.account_router import router as auth_router, teacher_router as teacher_auth_router
from helloworld.analytics.analytics_router import router as analytics_router
from helloworld.badges.badge_router import router as badge_router
from helloworld.chat.chat_router import router as chat_router
from helloworld.classes.class_router import router as class_router
from helloworld.config import CORS_ORIGINS, HOST, PORT, VERSION
from helloworld.content.content_router import router as content_router
from helloworld.core.audit_router import router as audit_router
from helloworld.core.database import create_indexes, get_db_instance
from helloworld.core.errors import register_exception_handlers
from helloworld.core.logging_config import init_logging
from helloworld.dashboard.dashboard_router import router as dashboard_router
from helloworld.notebook.notebook_router import router as notebook_router
from helloworld.progress.progress_router import router as progress_router, student_router as student_progress_router
from helloworld.pronunciation.pronunciation_router import router as pronunciation_router
from helloworld.quizzes.quiz_router import router as quiz_router
from helloworld.quizzes.teacher_quiz_router import router as teacher_quiz_router


app = FastAPI(title="HelloWorld API")

init_logging(app)
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"]
)


@app.on_event("startup")
async def startup_event():
    await create_indexes(get_db_instance())


# ==================== ROUTER REGISTRATION ====================
app.include_router(auth_router)
app.include_router(teacher_auth_router)
app.include_router(student_progress_router)
app.include_router(progress_router)
app.include_router(class_router)
app.include_router(teacher_quiz_router)
app.include_router(quiz_router)
app.include_router(pronunciation_router)
app.include_router(notebook_router)
app.include_router(content_router)
app.include_router(badge_router)
app.include_router(chat_router)
app.include_router(analytics_router)
app.include_router(audit_router)
app.include_router(dashboard_router)
# ============================================================


@app.get("/")
def root():
    return {"status": "success", "message": "HelloWorld API is running"}


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/version")
def get_version():
    return {"version": VERSION or "unknown", "status": "stable"}


def run():
    import uvicorn
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
