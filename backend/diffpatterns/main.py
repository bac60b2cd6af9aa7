from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from diffpatterns.api.analyze import router as analyze_router

app = FastAPI(title="Diff Pattern Analyzer API")

# 리포트 뷰어(로컬 프론트)에서 호출 허용.
# 외부에 띄울 때는 origins를 특정 도메인으로 제한해야 함.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analyze_router)


@app.get("/")
def root():
    return {"status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
