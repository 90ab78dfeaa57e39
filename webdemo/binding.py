"""
Body parsing: decode a request body into a pydantic model.

The decoder is picked from the Content-Type media type:
  - JSON (application/json, application/*+json)
  - XML (application/xml, text/xml, application/*+xml); children of the root
    element become fields, the root's own tag is ignored
  - forms (application/x-www-form-urlencoded, multipart/form-data)

Anything else is rejected with "Unprocessable Entity". Decode and validation
failures are re-raised as BodyParseError so the app's error handler reports
them like any other handler error.
"""

import json
import xml.etree.ElementTree as ET
from typing import Type, TypeVar

from fastapi import Request
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from webdemo.exceptions import BodyParseError

T = TypeVar("T", bound=BaseModel)

FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def media_type(request: Request) -> str:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower()


def decode_json(raw: bytes) -> dict:
    data = json.loads(raw)
    if data is None:
        # null leaves every field at its default
        return {}
    if not isinstance(data, dict):
        raise BodyParseError("JSON body must be an object")
    return data


def decode_xml(raw: bytes) -> dict:
    root = ET.fromstring(raw)
    return {child.tag: child.text or "" for child in root}


async def decode_form(request: Request) -> dict:
    try:
        form = await request.form()
    except StarletteHTTPException as e:
        raise BodyParseError(str(e.detail)) from e
    # uploaded files are not model fields
    return {key: value for key, value in form.multi_items() if isinstance(value, str)}


async def parse_body(request: Request, model: Type[T]) -> T:
    mime = media_type(request)

    try:
        if mime.endswith("/json") or mime.endswith("+json"):
            data = decode_json(await request.body())
        elif mime.endswith("/xml") or mime.endswith("+xml"):
            data = decode_xml(await request.body())
        elif mime in FORM_TYPES:
            data = await decode_form(request)
        else:
            raise BodyParseError("Unprocessable Entity")
        return model.model_validate(data)
    except (ValueError, ET.ParseError) as e:
        raise BodyParseError(str(e)) from e
