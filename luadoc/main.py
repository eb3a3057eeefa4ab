from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException  # type: ignore
from pydantic import BaseModel  # type: ignore

from luadoc.adapters.lua_adapter import LuaAdapter
from luadoc.cli import configure_logging
from luadoc.doc.builders import DocModelError
from luadoc.doc.export import doc_to_json_dict
from luadoc.project import build_doc_for_sources

logger = logging.getLogger(__name__)

app = FastAPI(title="LuaDoc Extractor (Lua -> JSON documentation)", version="0.1.0")
lua_adapter = LuaAdapter()


@app.on_event("startup")
def setup_logging():
    configure_logging()


class ParseRequest(BaseModel):
    code: str
    filename: Optional[str] = None


class SourceFile(BaseModel):
    filename: str
    code: str


class ProjectRequest(BaseModel):
    # namespace -> files, merged in list order
    namespaces: Dict[str, List[SourceFile]]


@app.get("/health")
def health():
    return {"ok": True}


@app.post("/parse")
def parse(req: ParseRequest):
    try:
        doc = lua_adapter.build_doc_for_code(req.code, req.filename)
    except DocModelError as e:
        raise HTTPException(status_code=422, detail=f"Invalid documentation: {e}")
    return doc_to_json_dict(doc)


@app.post("/parse/project")
def parse_project(req: ProjectRequest):
    if not req.namespaces:
        raise HTTPException(status_code=400, detail="Provide at least one namespace.")

    sources = {
        name: [(f.filename, f.code) for f in files]
        for name, files in req.namespaces.items()
    }
    try:
        doc = build_doc_for_sources(sources, lua_adapter)
    except DocModelError as e:
        raise HTTPException(status_code=422, detail=f"Invalid documentation: {e}")

    logger.info("Parsed project with %d namespaces", len(doc.namespaces))
    return doc_to_json_dict(doc)
