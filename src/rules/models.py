from pydantic import BaseModel, Field, model_validator


class ProjectRules(BaseModel):
    slug: str
    rules_version: str

class LedgerIdentityRules(BaseModel):
    owner: str = Field(min_length=1)
    custodian: str = Field(min_length=1)

    @model_validator(mode="after")
    def _distinct_accounts(self) -> "LedgerIdentityRules":
        # Payouts from custody to the owner would otherwise be self-transfers.
        if self.owner == self.custodian:
            raise ValueError("ledger.owner and ledger.custodian must differ")
        return self

class RoyaltyRules(BaseModel):
    premium_max_percent: int = Field(default=50, gt=0, le=100)
    max_percent: int = Field(default=100, gt=0, le=100)

class RatingRules(BaseModel):
    min_rating: int = Field(default=1, ge=0)
    max_rating: int = Field(default=5, ge=1)

    @model_validator(mode="after")
    def _ordered(self) -> "RatingRules":
        if self.min_rating > self.max_rating:
            raise ValueError("ratings.min_rating must not exceed ratings.max_rating")
        return self

class ReportRules(BaseModel):
    max_reason_length: int = Field(default=500, gt=0)

class StorageRules(BaseModel):
    db_filename: str = "ledger.db"
    migrations_dir: str = "migrations"

class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)
    data_dir_env: str = "LEDGER_DATA_DIR"

class Rules(BaseModel):
    project: ProjectRules
    ledger: LedgerIdentityRules
    royalties: RoyaltyRules = Field(default_factory=RoyaltyRules)
    ratings: RatingRules = Field(default_factory=RatingRules)
    reports: ReportRules = Field(default_factory=ReportRules)
    storage: StorageRules = Field(default_factory=StorageRules)
    ops: OpsRules = Field(default_factory=OpsRules)
