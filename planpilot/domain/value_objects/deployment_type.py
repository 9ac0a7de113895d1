"""DeploymentType 枚举 - 模拟部署目标"""

from enum import Enum


class DeploymentType(str, Enum):
    NETLIFY_STATIC = "netlify_static"
    VERCEL_STATIC = "vercel_static"
    GITHUB_PAGES = "github_pages"
    CUSTOM_HOSTING = "custom_hosting"
