"""测试：部署内容模板"""

import random
import re
from datetime import UTC, datetime

import pytest

from planpilot.domain.exceptions import ContentGenerationError
from planpilot.domain.services.content.deployment_templates import (
    DEPLOYMENT_PROVIDERS,
    generate_build_logs,
    perform_deployment,
)
from planpilot.domain.value_objects.deployment_type import DeploymentType

FIXED_NOW = datetime(2026, 2, 3, 4, 5, 6, tzinfo=UTC)
FIXED_MS = int(FIXED_NOW.timestamp() * 1000)


class TestProviderCatalogue:
    def test_every_deployment_type_has_a_provider(self):
        assert set(DEPLOYMENT_PROVIDERS) == set(DeploymentType)

    def test_github_pages_has_no_custom_domain(self):
        provider = DEPLOYMENT_PROVIDERS[DeploymentType.GITHUB_PAGES]

        assert provider.name == "GitHub Pages"
        assert provider.supports_custom_domain is False
        assert provider.build_command == "npm run build"
        assert provider.publish_dir == "dist"


class TestBuildLogs:
    def test_configuration_and_provider_are_listed(self):
        logs = generate_build_logs("Netlify", {"subdomain": "demo"}, now=FIXED_NOW)

        assert logs.startswith(f"🚀 Netlify Deployment Started at {FIXED_NOW.isoformat()}")
        assert "  subdomain: demo" in logs
        assert "✅ Uploading to Netlify..." in logs
        assert logs.endswith("🌐 Your site is now live and optimized for performance!")


class TestPerformDeployment:
    def test_netlify_uses_subdomain(self):
        draft = perform_deployment(
            DeploymentType.NETLIFY_STATIC, {"subdomain": "my-site"}, now=FIXED_NOW
        )

        assert draft.success is True
        assert draft.deployment_url == "https://my-site.netlify.app"
        assert draft.claim_url == "https://app.netlify.com/sites/my-site/overview"
        assert draft.deploy_id == f"netlify-{FIXED_MS}"

    def test_netlify_without_subdomain_gets_random_project_name(self):
        draft = perform_deployment("netlify_static", {}, rng=random.Random(3))

        assert re.fullmatch(r"https://project-[a-z0-9]{8}\.netlify\.app", draft.deployment_url)

    def test_vercel(self):
        draft = perform_deployment(
            DeploymentType.VERCEL_STATIC, {"subdomain": "shop"}, now=FIXED_NOW
        )

        assert draft.deployment_url == "https://shop.vercel.app"
        assert draft.claim_url == "https://vercel.com/dashboard"
        assert draft.deploy_id == f"vercel-{FIXED_MS}"
        assert "Vercel Deployment Started" in draft.build_logs

    def test_github_pages_defaults(self):
        draft = perform_deployment(DeploymentType.GITHUB_PAGES, {}, now=FIXED_NOW)

        assert draft.deployment_url == "https://user.github.io/project"
        assert draft.claim_url is None
        assert draft.deploy_id == f"github-{FIXED_MS}"

    def test_github_pages_with_repository(self):
        draft = perform_deployment(
            DeploymentType.GITHUB_PAGES, {"username": "auto-user", "repository": "docs"}
        )

        assert draft.deployment_url == "https://auto-user.github.io/docs"

    def test_custom_hosting(self):
        draft = perform_deployment(DeploymentType.CUSTOM_HOSTING, {"domain": "acme.dev"})

        assert draft.deployment_url == "https://acme.dev"
        assert "Custom Host Deployment Started" in draft.build_logs

    def test_custom_hosting_default_domain(self):
        draft = perform_deployment(DeploymentType.CUSTOM_HOSTING, {})

        assert draft.deployment_url == "https://example.com"

    def test_unknown_type_raises(self):
        with pytest.raises(ContentGenerationError):
            perform_deployment("ftp_upload", {})
