from typing import List
from pydantic import BaseModel


class Entry(BaseModel):
    name: str
    score: float = 0.0


# Ordered best-first, at most TOP_N entries
Ranking = List[Entry]


class RankingPair(BaseModel):
    group_a: List[Entry]
    group_b: List[Entry]
