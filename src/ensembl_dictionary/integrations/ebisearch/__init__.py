"""EBI Search REST integration."""

from ensembl_dictionary.integrations.ebisearch.client import EbiSearchClient, Fetcher

__all__ = ["EbiSearchClient", "Fetcher"]
