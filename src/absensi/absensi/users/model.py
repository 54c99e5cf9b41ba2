from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Entitas domain: pengguna (pegawai atau admin).

    Catatan: objek data murni, tanpa akses DB.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    is_active: bool = True

    @property
    def display_name(self) -> str:
        return self.name or self.email
