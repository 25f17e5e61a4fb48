"""Field-of-study fit between the candidate and the job."""

from pydantic import BaseModel


class MajorSignals(BaseModel):
    major: str = ""
    major_cluster: str | None = None
    job_family: str = "UNKNOWN"
    importance: float = 0.0  # 0.0-1.0 how much the JD cares about major
    explicit: bool = False  # JD states a major requirement or preference
    jd_major_hints: list[str] = []
    jd_clusters: list[str] = []
    similarity: float = 0.0  # 1.0 same cluster, 0.6 adjacent, 0.0 otherwise
    bonus: float = 0.0  # added to the objective score
    bridge_hint: bool = False
    note: str | None = None
