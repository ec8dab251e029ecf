from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes.process import router as process_router

app = FastAPI(
    title="Brain Dump Processor API",
    description="Pattern-based extraction of actions, people and dates from free-form notes",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
    ],
    allow_origin_regex=r"http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(process_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
