"""VCS root bindings for the provider repository."""

from azurestack_teamcity.models.build import GitVcsRoot, VcsSettings

PROVIDER_REPOSITORY = GitVcsRoot(
    id="providerRepository",
    name="terraform-provider-azurestack",
    url="https://github.com/hashicorp/terraform-provider-azurestack.git",
    branch="refs/heads/main",
    branch_spec="+:*",
    agent_clean_policy="ALWAYS",
    agent_clean_files_policy="ALL_UNTRACKED",
    auth_method="anonymous",
)


def provider_checkout() -> VcsSettings:
    """Attach the provider repository, always using a clean checkout."""
    return VcsSettings(root_id=PROVIDER_REPOSITORY.id, clean_checkout=True)
