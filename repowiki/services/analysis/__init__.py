"""
Client for the ADocS analysis service.

The service stores previously generated documentation and wiki bundles; this
package only reads from it.
"""

from repowiki.services.analysis.client import AnalysisServiceClient, create_analysis_client
from repowiki.services.analysis.exceptions import AnalysisServiceError, AnalysisServiceNotFound

__all__ = [
    "AnalysisServiceClient",
    "AnalysisServiceError",
    "AnalysisServiceNotFound",
    "create_analysis_client",
]
