"""
Routes and codecs for the host control surface.

A route pairs an HTTP trigger with a request/response codec:

    request.to_domain()        → registry Command
    response.from_domain(res)  ← Result[FlowView, ControlError]
"""

from dataclasses import dataclass
from typing import Any, Literal, Protocol, TypeVar

from kungfu import Result

DomainT_co = TypeVar("DomainT_co", covariant=True)
DomainT_contra = TypeVar("DomainT_contra", contravariant=True)


class ToDomain(Protocol[DomainT_co]):
    def to_domain(self) -> DomainT_co: ...


class FromDomain(Protocol[DomainT_contra]):
    @classmethod
    def from_domain(cls, dom: DomainT_contra) -> "FromDomain[DomainT_contra]": ...


type Method = Literal["GET", "POST"]


@dataclass(frozen=True, slots=True)
class HTTPRouteTrigger:
    method: Method
    path: str


@dataclass(frozen=True, slots=True)
class RequestResponseCodec:
    request: type[ToDomain[Any]]
    response: type[FromDomain[Result[Any, Any]]]


type Route = tuple[HTTPRouteTrigger, RequestResponseCodec]


__all__ = (
    "ToDomain",
    "FromDomain",
    "Method",
    "HTTPRouteTrigger",
    "RequestResponseCodec",
    "Route",
)
