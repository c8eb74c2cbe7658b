"""Dependency injection for HTTP routes."""

from typing import Annotated

from fastapi import Depends, Request

from ensembl_dictionary.services.dictionary import EnsemblDictionary


def get_dictionary(request: Request) -> EnsemblDictionary:
    """The dictionary instance created by ``create_app``."""
    dictionary: EnsemblDictionary = request.app.state.dictionary
    return dictionary


Dictionary = Annotated[EnsemblDictionary, Depends(get_dictionary)]
