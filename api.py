from __future__ import annotations

from typing import List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from inventory.errors import ScanError
from inventory.model import ScanReport
from inventory.scan import scan


app = FastAPI(title="Workspace Inventory")


class ScanRequest(BaseModel):
	directory: str = ""
	exclude_folders: List[str] = []


@app.post("/scan", response_model=ScanReport)
def scan_workspace(req: ScanRequest) -> ScanReport:
	if not req.directory.strip():
		raise HTTPException(status_code=400, detail="Directory is required")
	try:
		return scan(req.directory, req.exclude_folders)
	except ScanError as e:
		raise HTTPException(status_code=400, detail=str(e))


def create_app() -> FastAPI:
	return app
