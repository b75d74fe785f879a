"""DiffConfig: immutable options for a YAML comparison.

DiffConfig is a frozen dataclass validated in ``__post_init__``.  Sequence
options may be passed as lists; they are stored as tuples so the config
stays hashable and cannot be mutated after construction.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["DiffConfig"]

_TUPLE_FIELDS = (
    "additional_identifiers",
    "filter_paths",
    "exclude_paths",
    "filter_regexps",
    "exclude_regexps",
)


@dataclass(frozen=True, slots=True)
class DiffConfig:
    """Immutable configuration for a comparison.

    Attributes:
        ignore_order_changes: Compare sequences as multisets.
        ignore_whitespace_changes: Trim and collapse whitespace in strings
            before comparing them.
        ignore_value_changes: Suppress leaf value changes; structural changes
            (added/removed keys, container type changes) are still reported.
        detect_kubernetes: Match Kubernetes resources by identity instead of
            by document index.
        detect_renames: Pair unmatched Kubernetes resources by content
            similarity.
        ignore_api_version: Drop ``apiVersion`` from resource identity.
        no_cert_inspection: Compare certificate strings as plain text.
        additional_identifiers: Field names that identify mapping elements in
            a sequence, in priority order.  When empty, sequences are never
            keyed by identifier.
        filter_paths: Keep only entries at or below these paths.
        exclude_paths: Drop entries at or below these paths.
        filter_regexps: Keep only entries whose path matches one of these.
        exclude_regexps: Drop entries whose path matches one of these.
        chroot: Sub-path applied to both sides; overrides the per-side options.
        chroot_of_from: Sub-path applied to the from side only.
        chroot_of_to: Sub-path applied to the to side only.
        chroot_list_to_documents: Expand a sequence chroot target into one
            document per element.
        minor_change_threshold: Relative numeric change (``>= 0``) at or
            below which a modification is flagged ``minor``.
        use_go_patch_style: Render paths as ``/a/b/0`` instead of ``a.b[0]``.
            Presentation only; filtering always uses the dotted form.
        swap: Exchange the from and to sides before comparing.
        rename_similarity_threshold: Minimum score in [0, 1] for two
            Kubernetes resources to be reported as a rename.
        rename_limit: Skip rename detection when either side has more
            unmatched candidates than this.
    """

    ignore_order_changes: bool = False
    ignore_whitespace_changes: bool = False
    ignore_value_changes: bool = False
    detect_kubernetes: bool = True
    detect_renames: bool = True
    ignore_api_version: bool = False
    no_cert_inspection: bool = False
    additional_identifiers: tuple[str, ...] = ()
    filter_paths: tuple[str, ...] = ()
    exclude_paths: tuple[str, ...] = ()
    filter_regexps: tuple[str, ...] = ()
    exclude_regexps: tuple[str, ...] = ()
    chroot: str = ""
    chroot_of_from: str = ""
    chroot_of_to: str = ""
    chroot_list_to_documents: bool = False
    minor_change_threshold: float = 0.1
    use_go_patch_style: bool = False
    swap: bool = False
    rename_similarity_threshold: float = 0.6
    rename_limit: int = 50

    def __post_init__(self) -> None:
        for name in _TUPLE_FIELDS:
            value = getattr(self, name)
            if isinstance(value, str):
                msg = f"{name} must be a sequence of strings, got a single string {value!r}"
                raise ValueError(msg)
            object.__setattr__(self, name, tuple(value))
        if self.minor_change_threshold < 0.0:
            msg = f"minor_change_threshold must be >= 0.0, got {self.minor_change_threshold}"
            raise ValueError(msg)
        if not 0.0 <= self.rename_similarity_threshold <= 1.0:
            msg = (
                "rename_similarity_threshold must be in [0, 1], "
                f"got {self.rename_similarity_threshold}"
            )
            raise ValueError(msg)
        if self.rename_limit < 0:
            msg = f"rename_limit must be >= 0, got {self.rename_limit}"
            raise ValueError(msg)

    # ------------------------------------------------------------------
    # Derived settings
    # ------------------------------------------------------------------

    @property
    def from_chroot(self) -> str:
        return self.chroot or self.chroot_of_from

    @property
    def to_chroot(self) -> str:
        return self.chroot or self.chroot_of_to
