#!/usr/bin/env python3
from __future__ import annotations

from pydantic import BaseModel

from laakhay.uniapi import NamedEndpointRegistry


class Greeting(BaseModel):
    message: str


def hello(params: dict) -> Greeting:
    return Greeting(message=f"Hello, {params.get('name', 'world')}!")


def main() -> None:
    registry = NamedEndpointRegistry()
    registry.register("hello", hello)

    print(registry.call("hello", {"name": "Alice"}).decode())
    print(registry.call_as("hello", {"name": "Bob"}, Greeting).message)


if __name__ == "__main__":
    main()
