"""App Links deep-link descriptors, documented at http://applinks.org/documentation/

The decoder always allocates the iOS family and Android entries. The
Windows and web entries are declared for completeness but nothing fills them.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Ios(BaseModel):
    url: Optional[str] = None
    app_store_id: Optional[str] = None
    app_name: Optional[str] = None


class Iphone(Ios):
    pass


class Ipad(Ios):
    pass


class Android(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = None
    package: Optional[str] = None
    # "class" is reserved in Python
    class_name: Optional[str] = Field(default=None, alias="class")
    app_name: Optional[str] = None


class Windows(BaseModel):
    url: Optional[str] = None
    app_id: Optional[str] = None
    app_name: Optional[str] = None


class Web(BaseModel):
    url: Optional[str] = None
    should_fallback: Optional[bool] = None


class AppLink(BaseModel):
    ios: Optional[Ios] = None
    iphone: Optional[Iphone] = None
    ipad: Optional[Ipad] = None
    android: Optional[Android] = None
    windows_phone: Optional[Windows] = None
    windows: Optional[Windows] = None
    windows_universal: Optional[Windows] = None
    web: Optional[Web] = None
