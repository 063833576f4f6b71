#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from pydantic import BaseModel

from polymer import Endpoint, EndpointDescriptor, Error, Result


class Repo(BaseModel):
    id: int
    name: str
    stargazers_count: int = 0
    language: str | None = None


class UserReposDescriptor(EndpointDescriptor):
    @property
    def base_url(self) -> str:
        return "https://api.github.com"

    @property
    def endpoint_url(self) -> str:
        return "/users/:login/repos"

    @property
    def header_fields(self) -> dict[str, str]:
        return {"X-GitHub-Api-Version": "2022-11-28"}

    @property
    def acceptable_content_types(self) -> set[str]:
        return {"application/json", "application/vnd.github+json"}


class UserRepos(Endpoint[UserReposDescriptor, Repo]):
    pass


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List a GitHub user's public repositories")
    p.add_argument("login", nargs="?", default="python")
    p.add_argument("limit", nargs="?", type=int, default=10)
    p.add_argument("--debug", action="store_true")
    return p.parse_args()


def show(response: Result[Repo] | Error) -> None:
    match response:
        case Result(items=repos):
            print("=" * 60)
            print(f"{'Name':35} | {'Stars':>8} | {'Language':12}")
            print("-" * 60)
            for repo in repos:
                print(f"{repo.name:35} | {repo.stargazers_count:>8} | {repo.language or '-':12}")
            print("=" * 60)
        case Error(error=error):
            print(f"{error.domain} ({error.code}): {error.message}")


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    async with UserRepos(slug=args.login, parameters={"per_page": args.limit}) as endpoint:
        await endpoint.get(show)


if __name__ == "__main__":
    asyncio.run(main())
