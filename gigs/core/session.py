from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Optional

from .models import Bearer, Gig


@dataclass
class Session:
    bearer: Optional[Bearer] = None
    gigs: list[Gig] = field(default_factory=list)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def signed_in(self) -> bool:
        return self.bearer is not None

    async def current_bearer(self) -> Optional[Bearer]:
        async with self.lock:
            return self.bearer

    async def store_bearer(self, bearer: Bearer) -> None:
        async with self.lock:
            self.bearer = bearer

    async def replace_gigs(self, gigs: list[Gig]) -> list[Gig]:
        async with self.lock:
            self.gigs = list(gigs)
            return list(self.gigs)

    async def clear(self) -> None:
        async with self.lock:
            self.bearer = None
            self.gigs = []
