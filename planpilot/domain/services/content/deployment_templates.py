"""部署内容模板 - 模拟各托管平台的部署结果与构建日志

职责：
- DEPLOYMENT_PROVIDERS: 部署目标目录（名称、描述、构建命令等）
- generate_build_logs(): 把平台名称和配置插入固定的多行构建日志
- perform_deployment(): 按部署类型生成 DeploymentDraft
"""

from __future__ import annotations

import random
import string
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from planpilot.domain.entities.deployment import DeploymentDraft
from planpilot.domain.exceptions import ContentGenerationError
from planpilot.domain.value_objects.deployment_type import DeploymentType


@dataclass(frozen=True)
class DeploymentProvider:
    name: str
    description: str
    supports_custom_domain: bool
    build_command: str = "npm run build"
    publish_dir: str = "dist"


DEPLOYMENT_PROVIDERS: dict[DeploymentType, DeploymentProvider] = {
    DeploymentType.NETLIFY_STATIC: DeploymentProvider(
        name="Netlify",
        description="Deploy static websites and SPAs",
        supports_custom_domain=True,
    ),
    DeploymentType.VERCEL_STATIC: DeploymentProvider(
        name="Vercel",
        description="Deploy static and serverless applications",
        supports_custom_domain=True,
    ),
    DeploymentType.GITHUB_PAGES: DeploymentProvider(
        name="GitHub Pages",
        description="Deploy static sites via GitHub",
        supports_custom_domain=False,
    ),
    DeploymentType.CUSTOM_HOSTING: DeploymentProvider(
        name="Custom Hosting",
        description="Deploy to your own hosting provider",
        supports_custom_domain=True,
    ),
}

BUILD_LOG_TEMPLATE = """🚀 {provider} Deployment Started at {timestamp}

📋 Configuration:
{configuration}

⏳ Build Process:
✅ Installing dependencies...
   npm install completed (2.3s)

✅ Running build command...
   npm run build

   > build
   > vite build

   vite v5.4.2 building for production...
   ✓ 34 modules transformed.
   dist/index.html                  0.46 kB │ gzip:  0.30 kB
   dist/assets/index-DiwrgTda.css   1.25 kB │ gzip:  0.62 kB
   dist/assets/index-BgFiYXyN.js   142.84 kB │ gzip: 45.87 kB
   ✓ built in 1.42s

✅ Optimizing assets...
   Image optimization: 3 images processed
   CSS minification: -24% reduction
   JS compression: -68% reduction

✅ Uploading to {provider}...
   Uploading 15 files...
   Upload complete (1.8s)

✅ DNS propagation...
   DNS records updated
   SSL certificate provisioned
   CDN cache cleared

🎉 Deployment successful!

📈 Performance:
   Build time: 4.2s
   Upload time: 1.8s
   Total deployment time: 8.7s

🌐 Your site is now live and optimized for performance!"""


def generate_build_logs(
    provider: str, config: dict[str, Any], *, now: datetime | None = None
) -> str:
    configuration = "\n".join(f"  {key}: {value}" for key, value in config.items())
    return BUILD_LOG_TEMPLATE.format(
        provider=provider,
        timestamp=(now or datetime.now(UTC)).isoformat(),
        configuration=configuration,
    )


def _random_project_name(rng: random.Random | None) -> str:
    alphabet = string.ascii_lowercase + string.digits
    suffix = "".join((rng or random).choice(alphabet) for _ in range(8))
    return f"project-{suffix}"


def _deploy_id(prefix: str, now: datetime) -> str:
    return f"{prefix}-{int(now.timestamp() * 1000)}"


def perform_deployment(
    deployment_type: DeploymentType | str,
    config: dict[str, Any],
    *,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> DeploymentDraft:
    """模拟部署

    抛出：
        ContentGenerationError: 未知的部署类型
    """
    try:
        kind = DeploymentType(deployment_type)
    except ValueError as exc:
        raise ContentGenerationError("Unknown deployment type") from exc

    moment = now or datetime.now(UTC)
    provider_name = DEPLOYMENT_PROVIDERS[kind].name

    if kind == DeploymentType.NETLIFY_STATIC:
        subdomain = config.get("subdomain") or _random_project_name(rng)
        return DeploymentDraft(
            success=True,
            deployment_url=f"https://{subdomain}.netlify.app",
            claim_url=f"https://app.netlify.com/sites/{subdomain}/overview",
            deploy_id=_deploy_id("netlify", moment),
            build_logs=generate_build_logs(provider_name, config, now=moment),
        )

    if kind == DeploymentType.VERCEL_STATIC:
        subdomain = config.get("subdomain") or _random_project_name(rng)
        return DeploymentDraft(
            success=True,
            deployment_url=f"https://{subdomain}.vercel.app",
            claim_url="https://vercel.com/dashboard",
            deploy_id=_deploy_id("vercel", moment),
            build_logs=generate_build_logs(provider_name, config, now=moment),
        )

    if kind == DeploymentType.GITHUB_PAGES:
        username = config.get("username") or "user"
        repository = config.get("repository") or "project"
        return DeploymentDraft(
            success=True,
            deployment_url=f"https://{username}.github.io/{repository}",
            deploy_id=_deploy_id("github", moment),
            build_logs=generate_build_logs(provider_name, config, now=moment),
        )

    domain = config.get("domain") or "example.com"
    return DeploymentDraft(
        success=True,
        deployment_url=f"https://{domain}",
        deploy_id=_deploy_id("custom", moment),
        build_logs=generate_build_logs("Custom Host", config, now=moment),
    )
