"""Built-in registry configuration factories.

Each factory targets one kind of container registry and produces the
kaniko build arguments together with the volumes that carry the registry
credentials into the build container.

Supported Registries:
- DOCKER_HUB: Docker Hub, credentials from a docker config secret
- AMAZON_ECR: Amazon ECR, AWS credentials plus the ECR credential helper config
- GCR: Google Container Registry, service account key secret
- QUAY: Quay.io, credentials from a docker config secret
- HTTP: Private registry over plain HTTP
- HTTPS: Private registry over HTTPS
"""

from __future__ import annotations

from routesync.registry.types import (
    ConfigFactory,
    RegistryConfig,
    RegistryType,
    Volume,
    VolumeMount,
)

DOCKER_CONFIG_PATH = "/kaniko/.docker"
DOCKER_SECRET_NAME = "docker-secret"
AWS_CREDENTIALS_PATH = "/root/.aws"
AWS_SECRET_NAME = "aws-cred-secret"
ECR_CONFIG_MAP_NAME = "docker-config"
GCR_KEY_PATH = "/kaniko/.gcr"
GCR_SECRET_NAME = "gcr-secret"


def destination_arg(destination: str) -> str:
    return "--destination=" + destination


def _docker_config_volume() -> tuple[VolumeMount, Volume]:
    mount = VolumeMount(name="docker-config", mount_path=DOCKER_CONFIG_PATH)
    volume = Volume(name="docker-config", secret_name=DOCKER_SECRET_NAME)
    return mount, volume


def docker_hub_config(repository: str, image: str) -> RegistryConfig:
    mount, volume = _docker_config_volume()
    return RegistryConfig(
        registry_type=RegistryType.DOCKER_HUB.value,
        args=[destination_arg(f"{repository}/{image}")],
        volume_mounts=[mount],
        volumes=[volume],
    )


def amazon_ecr_config(repository: str, image: str) -> RegistryConfig:
    """ECR pushes use the credential helper, configured through a config map."""
    return RegistryConfig(
        registry_type=RegistryType.AMAZON_ECR.value,
        args=[destination_arg(f"{repository}/{image}")],
        volume_mounts=[
            VolumeMount(name="aws-credentials", mount_path=AWS_CREDENTIALS_PATH),
            VolumeMount(name="docker-config", mount_path=DOCKER_CONFIG_PATH),
        ],
        volumes=[
            Volume(name="aws-credentials", secret_name=AWS_SECRET_NAME),
            Volume(name="docker-config", config_map_name=ECR_CONFIG_MAP_NAME),
        ],
    )


def gcr_config(repository: str, image: str) -> RegistryConfig:
    return RegistryConfig(
        registry_type=RegistryType.GCR.value,
        args=[destination_arg(f"gcr.io/{repository}/{image}")],
        volume_mounts=[VolumeMount(name="gcr-key", mount_path=GCR_KEY_PATH)],
        volumes=[Volume(name="gcr-key", secret_name=GCR_SECRET_NAME)],
    )


def quay_config(repository: str, image: str) -> RegistryConfig:
    mount, volume = _docker_config_volume()
    return RegistryConfig(
        registry_type=RegistryType.QUAY.value,
        args=[destination_arg(f"quay.io/{repository}/{image}")],
        volume_mounts=[mount],
        volumes=[volume],
    )


def http_config(repository: str, image: str) -> RegistryConfig:
    """Plain HTTP registries need TLS verification and HTTPS disabled."""
    mount, volume = _docker_config_volume()
    return RegistryConfig(
        registry_type=RegistryType.HTTP.value,
        args=[
            destination_arg(f"{repository}/{image}"),
            "--insecure",
            "--skip-tls-verify",
        ],
        volume_mounts=[mount],
        volumes=[volume],
    )


def https_config(repository: str, image: str) -> RegistryConfig:
    mount, volume = _docker_config_volume()
    return RegistryConfig(
        registry_type=RegistryType.HTTPS.value,
        args=[destination_arg(f"{repository}/{image}")],
        volume_mounts=[mount],
        volumes=[volume],
    )


# Built-in factory table, in registration order
BUILTIN_FACTORIES: dict[str, ConfigFactory] = {
    RegistryType.DOCKER_HUB.value: docker_hub_config,
    RegistryType.AMAZON_ECR.value: amazon_ecr_config,
    RegistryType.GCR.value: gcr_config,
    RegistryType.QUAY.value: quay_config,
    RegistryType.HTTP.value: http_config,
    RegistryType.HTTPS.value: https_config,
}
