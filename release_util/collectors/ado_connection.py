"""
Shared Release Service Connection Module

Provides centralized connection management for the release collectors.

Functions:
    get_ado_connection(project_collection_url) -> Connection
        Create an authenticated connection using ADO_PAT from secure_config.
        No request is made until a client is requested.

    get_release_client(connection) -> ReleaseClient
        Get the Release Management client for a connection. The SDK resolves
        the client's resource area here, so this is the first network call.

Usage:
    from release_util.collectors.ado_connection import get_ado_connection, get_release_client

    connection = get_ado_connection("https://dev.azure.com/fabrikam")
    release_client = get_release_client(connection)
"""

from azure.devops.connection import Connection
from azure.devops.v7_1.release import ReleaseClient
from msrest.authentication import BasicAuthentication

from ..secure_config import get_config


def get_ado_connection(project_collection_url: str) -> Connection:
    """
    Get a release service connection for a project collection.

    Args:
        project_collection_url: Collection URL from --project-collection-url

    Returns:
        Connection: Authenticated connection object

    Raises:
        ConfigurationError: If the URL or ADO_PAT is missing or invalid
    """
    ado_config = get_config().get_ado_config(project_collection_url)

    credentials = BasicAuthentication("", ado_config.pat)
    return Connection(base_url=ado_config.organization_url, creds=credentials)


def get_release_client(connection: Connection) -> ReleaseClient:
    """
    Get Release Management client.

    Raises:
        AzureDevOpsAuthenticationError: If the collection rejects the credentials
        ClientRequestError: If the collection cannot be reached
    """
    return connection.clients.get_release_client()
