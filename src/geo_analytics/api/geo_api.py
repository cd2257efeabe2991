# ============================================================
# 📦 src/geo_analytics/api/geo_api.py
# ============================================================

import json

import numpy as np
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from geo_analytics import __version__
from geo_analytics.api.routes import router as geo_router
from geo_analytics.config import API_PARAMS
from geo_analytics.infrastructure.logging.run_logger import configurar_logger

configurar_logger()

# ============================================================
# 🚀 App
# ============================================================

app = FastAPI(
    title="POS Geo Analytics API",
    description="Clusterização, previsão de vendas e cobertura de pontos de serviço",
    version=__version__,
    openapi_url="/openapi.json",
    docs_url="/docs",
)

# ============================================================
# 🌍 CORS
# ============================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================
# 🧹 Middleware — sanitizar JSON (NaN / Infinity)
# ============================================================

@app.middleware("http")
async def sanitize_json_response(request: Request, call_next):
    response = await call_next(request)

    content_type = response.headers.get("content-type", "")
    if "application/json" not in content_type:
        return response

    raw_body = b"".join([chunk async for chunk in response.body_iterator])
    try:
        content = json.loads(raw_body)
    except ValueError:
        # corpo já consumido: devolve o original intacto
        return Response(
            content=raw_body,
            status_code=response.status_code,
            headers=dict(response.headers),
            media_type=response.media_type,
        )

    def clean(obj):
        if isinstance(obj, dict):
            return {k: clean(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [clean(i) for i in obj]
        if isinstance(obj, float) and (np.isnan(obj) or np.isinf(obj)):
            return None
        return obj

    return JSONResponse(content=clean(content), status_code=response.status_code)

# ============================================================
# 🔀 ROTAS
# ============================================================

app.include_router(geo_router, prefix="/geo", tags=["Geo Analytics"])

# ============================================================
# 🩺 Health local
# ============================================================

@app.get("/")
def root():
    return {"status": "POS Geo Analytics API online 🚀"}

# ============================================================
# 🚀 Execução standalone (dev)
# ============================================================

if __name__ == "__main__":
    uvicorn.run(
        "geo_analytics.api.geo_api:app",
        host=API_PARAMS["host"],
        port=API_PARAMS["port"],
        reload=True,
    )
