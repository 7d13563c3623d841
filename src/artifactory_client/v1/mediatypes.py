"""
Media types used for Accept/Content-Type negotiation on v1 endpoints.
"""
MEDIA_TYPE_PLAIN = "text/plain"
MEDIA_TYPE_JSON = "application/json"
MEDIA_TYPE_FILE_INFO = "application/vnd.org.jfrog.artifactory.storage.FileInfo+json"
MEDIA_TYPE_REPLICATION_CONFIG = (
    "application/vnd.org.jfrog.artifactory.replications.ReplicationConfigRequest+json"
)
