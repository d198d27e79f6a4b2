"""Supabase implementation for the mixture collection."""

from dataclasses import asdict, dataclass

from supabase import Client

from nutricu.domain.mixtures import Mixture
from nutricu.services.mixtures import MixtureRepository


@dataclass
class SupabaseMixtureRepository(MixtureRepository):
    """Supabase-backed repository for mixtures."""

    client: Client

    def list_mixtures(self) -> list[Mixture]:
        """Return all mixtures ordered by insertion time."""
        response = (
            self.client.table("mixtures").select("*").order("inserted_at").execute()
        )
        return [_parse_mixture(row) for row in response.data or []]

    def get_mixture(self, mixture_id: str) -> Mixture | None:
        """Return a mixture by id, if present."""
        response = (
            self.client.table("mixtures")
            .select("*")
            .eq("id", mixture_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_mixture(response.data[0])

    def create_mixture(self, mixture: Mixture) -> Mixture:
        """Insert a mixture row and return it."""
        response = self.client.table("mixtures").insert(asdict(mixture)).execute()
        if not response.data:
            raise RuntimeError("Failed to create mixture")
        return _parse_mixture(response.data[0])

    def update_mixture(self, mixture: Mixture) -> Mixture:
        """Update a mixture row and return it."""
        payload = asdict(mixture)
        payload.pop("id")
        response = (
            self.client.table("mixtures")
            .update(payload)
            .eq("id", mixture.id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update mixture")
        return _parse_mixture(response.data[0])

    def delete_mixture(self, mixture_id: str) -> None:
        """Delete a mixture row."""
        self.client.table("mixtures").delete().eq("id", mixture_id).execute()

    def name_exists(self, name: str, exclude_id: str | None = None) -> bool:
        """Case-insensitive name check, optionally ignoring one id."""
        query = (
            self.client.table("mixtures")
            .select("id")
            .ilike("name", _escape_like(name))
        )
        if exclude_id is not None:
            query = query.neq("id", exclude_id)
        response = query.limit(1).execute()
        return bool(response.data)


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so the match is exact."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _parse_mixture(row: dict[str, object]) -> Mixture:
    """Parse a mixture row into a domain model."""
    return Mixture(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        calories_per_1000ml=float(row.get("calories_per_1000ml", 0.0)),
        protein_per_1000ml=float(row.get("protein_per_1000ml", 0.0)),
        is_diabetic=bool(row.get("is_diabetic", False)),
        is_semi_elemental=bool(row.get("is_semi_elemental", False)),
        is_default=bool(row.get("is_default", False)),
    )
