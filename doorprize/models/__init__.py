"""ORM models."""

from doorprize.models.base import Base
from doorprize.models.contestant import Contestant
from doorprize.models.draw import Draw
from doorprize.models.prize import Prize
from doorprize.models.raffle_session import RaffleSession
from doorprize.models.winner import Winner

__all__ = ["Base", "Contestant", "Draw", "Prize", "RaffleSession", "Winner"]
