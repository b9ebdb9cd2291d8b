"""FastAPI web service decoding NMEA text on request.

Start with::

    uvicorn server.main:app --host 0.0.0.0 --port 8000

``POST /parse`` takes raw NMEA text as the request body and returns the
decoded records as JSON, one entry per message type::

    curl --data-binary @track.nmea http://localhost:8000/parse?message=GGA

``GET /messages`` lists the message types the service can decode.
"""

import asyncio

from fastapi import FastAPI, HTTPException, Query, Request, Response

from navdecode.nmea import ALL_SCHEMAS, MessageSchema, parse
from server.formatters import format_parse_result, format_schema

_SCHEMAS_BY_NAME = {schema.name: schema for schema in ALL_SCHEMAS}

app = FastAPI(title="navdecode")


def _select_schemas(names: list[str] | None) -> list[MessageSchema]:
    if not names:
        return list(ALL_SCHEMAS)
    unknown = [name for name in names if name not in _SCHEMAS_BY_NAME]
    if unknown:
        raise HTTPException(status_code=404, detail=f"Unknown message types: {unknown}")
    return [_SCHEMAS_BY_NAME[name] for name in dict.fromkeys(names)]


@app.post("/parse")
async def parse_endpoint(
    request: Request,
    message: list[str] | None = Query(default=None),
) -> Response:
    """Decode the NMEA text in the request body.

    Decoding runs in the default executor, off the event loop. Sentences
    with a bad checksum are skipped. Message types that fail to decode are
    listed under ``"errors"`` with the reason; the others are still returned
    under ``"messages"``.

    Args:
        request: Request whose body holds the raw text.
        message: Optional message type names to restrict decoding to;
            repeat the query parameter for several types.
    """
    schemas = _select_schemas(message)
    body = await request.body()
    loop = asyncio.get_running_loop()
    result = await loop.run_in_executor(None, parse, schemas, body)
    return Response(content=format_parse_result(result), media_type="application/json")


@app.get("/messages")
def list_messages() -> list[dict]:
    """Describe every message type the service decodes."""
    return [format_schema(schema) for schema in ALL_SCHEMAS]
