# Di dalam file: main.py

from typing import List

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import calculator
from config import settings
from errors import FaraidhError
from logging_utils import setup_logging
from schemas import CalculationRequest, CalculationResult, ErrorResponse, Heir, HeirType

origins = [
    "http://localhost",
    "http://localhost:3000",  # Alamat frontend Next.js
]


def create_app() -> FastAPI:
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Kalkulator Faraidh",
        description="API perhitungan waris Islam: furudh, hijab, 'ashobah, 'aul, radd, dan kasus-kasus khusus.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(FaraidhError)
    async def faraidh_error_handler(request: Request, exc: FaraidhError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.get("/")
    def read_root():
        """
        Endpoint utama untuk menyapa pengguna.
        """
        return {"message": "Selamat datang di Kalkulator Faraidh"}

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/heirs/", response_model=List[Heir])
    def read_heirs():
        """
        Daftar semua jenis ahli waris yang dikenal mesin.
        """
        return [Heir.of(heir_type) for heir_type in HeirType]

    @app.post(
        "/calculate/",
        response_model=CalculationResult,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def run_calculation(payload: CalculationRequest):
        """
        Endpoint utama untuk menjalankan perhitungan Faraidh.
        """
        return calculator.calculate_inheritance(payload, options=payload.options)

    return app


app = create_app()
