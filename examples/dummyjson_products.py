#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from pydantic import BaseModel, Field

from laakhay.uniapi import CallOptions, Endpoint, Service, SkipLimitPaginator, call


class Product(BaseModel):
    id: int
    title: str
    price: float = 0.0


class ProductPage(BaseModel):
    products: list[Product] = Field(default_factory=list)
    total: int | None = None
    skip: int | None = None
    limit: int | None = None


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List every DummyJSON product via auto-pagination")
    p.add_argument("page_size", nargs="?", type=int, default=50)
    p.add_argument("--base-url", default="https://dummyjson.com")
    p.add_argument("--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    service = Service(args.base_url, call_timeout=60.0)
    service.add_endpoint(
        "GET",
        Endpoint(
            "/products",
            ProductPage,
            SkipLimitPaginator(list_field="products", count_field="total"),
        ),
    )

    options = CallOptions(query={"limit": args.page_size, "select": "title,price"})
    async with service:
        page = await call(service, ProductPage, "GET", "/products", options)

    print("=" * 65)
    print(f"Total      : {page.total}")
    print(f"Fetched    : {len(page.products)}")
    print("=" * 65)
    print(f"{'ID':>5} | {'Title':45} | {'Price':>9}")
    print("-" * 65)
    for p in page.products:
        print(f"{p.id:>5} | {p.title[:45]:45} | {p.price:>9.2f}")
    print("=" * 65)


if __name__ == "__main__":
    asyncio.run(main())
