"""调用方身份 - 来自 X-User-Id 请求头

认证协议不在本服务范围内；前置网关负责认证并注入该请求头。
"""

from fastapi import Header

ANONYMOUS_USER_ID = "anonymous"


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    if x_user_id is None or not x_user_id.strip():
        return ANONYMOUS_USER_ID
    return x_user_id.strip()
