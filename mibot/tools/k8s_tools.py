"""Read-only Kubernetes queries and their chat formatting."""

import json
import logging
from typing import Iterable, List, Optional

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

logger = logging.getLogger(__name__)


class KubeQueryError(Exception):
    """A list call against the cluster failed."""

    def __init__(self, cause: str):
        super().__init__(cause)
        self.cause = cause


def load_kube_config(kubeconfig: str = "") -> None:
    """Load cluster credentials into the default client configuration.

    Args:
        kubeconfig: Path to a kubeconfig file. When empty, the in-cluster
            service account is tried first, then the default kubeconfig.
    """
    if kubeconfig:
        config.load_kube_config(config_file=kubeconfig)
        logger.info(f"Loaded Kubernetes configuration from: {kubeconfig}")
        return

    try:
        config.load_incluster_config()
        logger.info("Loaded in-cluster Kubernetes configuration")
    except config.ConfigException:
        config.load_kube_config()
        logger.info("Loaded default kubeconfig")


def describe_api_error(error: Exception) -> str:
    """Turn a client failure into a one-line cause suitable for chat."""
    if isinstance(error, ApiException):
        try:
            body = json.loads(error.body or "{}")
        except (TypeError, ValueError):
            body = None
        message = body.get("message") if isinstance(body, dict) else None
        return message or f"{error.status} {error.reason}"
    return str(error) or error.__class__.__name__


class KubeClient:
    """Lists deployments and pods in a namespace."""

    def __init__(self, api_client: Optional[client.ApiClient] = None,
                 request_timeout: Optional[float] = None):
        self.apps_v1 = client.AppsV1Api(api_client)
        self.core_v1 = client.CoreV1Api(api_client)
        self.request_timeout = request_timeout

    def _call(self, list_fn, namespace: str) -> List:
        kwargs = {}
        if self.request_timeout is not None:
            kwargs["_request_timeout"] = self.request_timeout
        try:
            return list_fn(namespace=namespace, **kwargs).items
        except (ApiException, HTTPError, ValueError) as e:
            raise KubeQueryError(describe_api_error(e)) from e

    def list_deployments(self, namespace: str) -> List[client.V1Deployment]:
        return self._call(self.apps_v1.list_namespaced_deployment, namespace)

    def list_pods(self, namespace: str) -> List[client.V1Pod]:
        return self._call(self.core_v1.list_namespaced_pod, namespace)


def count_running_containers(pod: client.V1Pod) -> tuple:
    """Return (running, total) container counts from the pod's statuses."""
    statuses = (pod.status.container_statuses if pod.status else None) or []
    running = sum(1 for cs in statuses if cs.state is not None and cs.state.running is not None)
    return running, len(statuses)


def format_deployments(deployments: Iterable[client.V1Deployment]) -> str:
    """Format deployments as a fenced block, one name per line."""
    output = "```\n"
    for deployment in deployments:
        output += f"{deployment.metadata.name}\n"
    output += "```"
    return output


def format_pods(pods: Iterable[client.V1Pod]) -> str:
    """Format pods as a fenced block of `name<TAB>phase<TAB>running/total` lines."""
    output = "```\n"
    for pod in pods:
        running, total = count_running_containers(pod)
        phase = (pod.status.phase if pod.status else None) or ""
        output += f"{pod.metadata.name}\t{phase}\t{running}/{total}\n"
    output += "```"
    return output
