"""Scalar constants for HubPulse.

Endpoint paths, upstream status families and telemetry identifiers.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "HubPulse"
CONFIG_ENV_VAR: Final = "HUBPULSE_CONFIG"

# ============================================================================
# Control plane base URLs
# ============================================================================

REGION_BASE_URLS: Final = {
    "us": "https://anypoint.mulesoft.com",
    "eu": "https://eu1.anypoint.mulesoft.com",
    "gov": "https://gov.anypoint.mulesoft.com",
}

# ============================================================================
# Deployment listing endpoints (relative to the control plane base URL)
# ============================================================================

CH1_APPLICATIONS_PATH: Final = "/cloudhub/api/applications"
CH2_AMC_DEPLOYMENTS_PATH: Final = (
    "/amc/application-manager/api/v2/organizations/{organization_id}"
    "/environments/{environment_id}/deployments"
)
CH2_ARM_APPLICATIONS_PATH: Final = "/armui/api/v2/applications"
HYBRID_APPLICATIONS_PATH: Final = "/hybrid/api/v1/applications"

ENV_ID_HEADER: Final = "X-ANYPNT-ENV-ID"
ORG_ID_HEADER: Final = "X-ANYPNT-ORG-ID"

# ARM lists every runtime target; CloudHub 2.0 shared-space apps match these
CH2_ARM_TARGET_TYPE: Final = "MC"
CH2_ARM_TARGET_SUBTYPE: Final = "shared-space"

# ============================================================================
# Monitoring (Visualizer) endpoints
# ============================================================================

VISUALIZER_BOOTDATA_PATH: Final = "/monitoring/api/visualizer/api/bootdata"
VISUALIZER_QUERY_PATH: Final = (
    "/monitoring/api/visualizer/api/datasources/proxy/{datasource_id}/query"
)
INFLUXDB_DATASOURCE_TYPE: Final = "influxdb"
INFLUXDB_DATASOURCE_NAME: Final = "influxdb"

CLOUDHUB_DOMAIN_SUFFIX: Final = "cloudhub.io"

# ============================================================================
# Telemetry measurements
# ============================================================================

CPU_MEASUREMENT: Final = "jvm.cpu.operatingsystem"
CPU_FIELD: Final = "cpu"
CPU_SCALE: Final = 100.0
MEMORY_MEASUREMENT: Final = "jvm.memory"
MEMORY_FIELD: Final = "heap_used"
MEMORY_SCALE: Final = 1 / (1024 * 1024)
REQUESTS_MEASUREMENT: Final = "app_inbound_metric"
REQUESTS_FIELD: Final = "avg_request_count"
FAILED_RESPONSE_TYPE: Final = "FAILED"

# ============================================================================
# Status families (compared upper-cased)
# ============================================================================

RUNNING_FAMILY_STATUSES: Final = frozenset({"RUNNING", "STARTED", "APPLIED", "DEPLOYING"})
STOPPED_FAMILY_STATUSES: Final = frozenset({"STOPPED", "UNDEPLOYED", "NOT_RUNNING"})
# Summary "running" bucket excludes in-flight deployments
ACTIVE_STATUSES: Final = frozenset({"RUNNING", "STARTED", "APPLIED"})

# ============================================================================
# Diagnostics
# ============================================================================

METRICS_UNAVAILABLE_REASON: Final = "Visualizer not available"
NO_METRICS_DATA_REASON: Final = "No metrics data"
METRICS_REQUEST_FAILED_REASON: Final = "Metrics request failed"

__all__ = [
    "ACTIVE_STATUSES",
    "APP_TITLE",
    "CH1_APPLICATIONS_PATH",
    "CH2_AMC_DEPLOYMENTS_PATH",
    "CH2_ARM_APPLICATIONS_PATH",
    "CH2_ARM_TARGET_SUBTYPE",
    "CH2_ARM_TARGET_TYPE",
    "CLOUDHUB_DOMAIN_SUFFIX",
    "CONFIG_ENV_VAR",
    "CPU_FIELD",
    "CPU_MEASUREMENT",
    "CPU_SCALE",
    "ENV_ID_HEADER",
    "FAILED_RESPONSE_TYPE",
    "HYBRID_APPLICATIONS_PATH",
    "INFLUXDB_DATASOURCE_NAME",
    "INFLUXDB_DATASOURCE_TYPE",
    "MEMORY_FIELD",
    "MEMORY_MEASUREMENT",
    "MEMORY_SCALE",
    "METRICS_REQUEST_FAILED_REASON",
    "METRICS_UNAVAILABLE_REASON",
    "NO_METRICS_DATA_REASON",
    "ORG_ID_HEADER",
    "REGION_BASE_URLS",
    "REQUESTS_FIELD",
    "REQUESTS_MEASUREMENT",
    "RUNNING_FAMILY_STATUSES",
    "STOPPED_FAMILY_STATUSES",
    "VISUALIZER_BOOTDATA_PATH",
    "VISUALIZER_QUERY_PATH",
]
