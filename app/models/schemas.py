"""Pydantic schemas for back-office requests and computed reports."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from app.core.validation import sanitize_string, validate_date

MaterialType = Literal["CLIENT", "OWN"]
StockType = Literal["RAW_IN", "RAW_OUT", "PRODUCTION", "ORDER_DEDUCTION", "WASTAGE", "ADJUSTMENT"]
StockItemType = Literal["RAW_SILVER", "WASTAGE", "FINISHED_GOODS"]
RateSource = Literal["MCX", "Local Dealer"]


def _check_date(value: str) -> str:
    if not validate_date(value):
        raise ValueError(f"Invalid date: {value}")
    return value


class OrderItemCreate(BaseModel):
    description: str
    quantity: float = Field(..., gt=0)
    unit: str = "Piece"
    rate: float = Field(..., ge=0)
    product_id: Optional[str] = None
    weight: Optional[float] = Field(None, ge=0)
    wastage_percent: Optional[float] = Field(None, ge=0)
    labour_cost: Optional[float] = Field(None, ge=0)
    has_karigar: bool = False
    karigar_id: Optional[str] = None
    karigar_rate: Optional[float] = Field(None, ge=0)
    karigar_quantity: Optional[float] = Field(None, ge=0)

    @field_validator("description")
    @classmethod
    def _clean_description(cls, v: str) -> str:
        return sanitize_string(v)


class OrderCreate(BaseModel):
    customer_name: str = Field(..., min_length=1)
    order_date: str = Field(..., description="Order date in YYYY-MM-DD format")
    material_type: MaterialType = Field(..., description="CLIENT brings own silver (job work), OWN sells ours")
    items: list[OrderItemCreate] = Field(..., min_length=1)
    gst_enabled: Optional[bool] = Field(None, description="Defaults to True for OWN material, False for CLIENT")

    @field_validator("customer_name")
    @classmethod
    def _clean_name(cls, v: str) -> str:
        cleaned = sanitize_string(v)
        if not cleaned:
            raise ValueError("Customer name is required")
        return cleaned

    @field_validator("order_date")
    @classmethod
    def _valid_date(cls, v: str) -> str:
        return _check_date(v)

    @property
    def gst_applies(self) -> bool:
        if self.gst_enabled is None:
            return self.material_type == "OWN"
        return self.gst_enabled


class OrderTotals(BaseModel):
    subtotal: float
    gst_rate: float
    gst_amount: float
    total_amount: float


class StockTransactionCreate(BaseModel):
    type: StockType
    item_type: StockItemType
    quantity: float = Field(..., ge=0)
    weight_gm: Optional[float] = Field(None, ge=0)
    product_id: Optional[str] = None
    note: Optional[str] = None
    source: Optional[str] = None
    rate_at_time: Optional[float] = Field(None, ge=0)
    wastage_percent: Optional[float] = Field(None, ge=0)
    date: Optional[str] = None


class StockSummary(BaseModel):
    raw_silver: float = 0
    wastage: float = 0
    finished_goods_count: float = 0
    finished_goods_weight: float = 0
    total_value: float = 0


class MetalInventory(BaseModel):
    id: str
    name: str
    weight_gm: float


class SilverRateCreate(BaseModel):
    rate_date: str
    source: RateSource
    rate_10g: float = Field(..., gt=0)
    notes: Optional[str] = None

    @field_validator("rate_date")
    @classmethod
    def _valid_date(cls, v: str) -> str:
        return _check_date(v)


class KarigarCreate(BaseModel):
    name: str = Field(..., min_length=1)
    work_type: Literal["Cutting", "Choti", "Half Belt", "General"] = "General"
    rate_type: Literal["Per KG", "Per Piece", "Fixed"] = "Per Piece"
    default_rate: float = Field(0, ge=0)
    status: Literal["ACTIVE", "INACTIVE"] = "ACTIVE"


class SettlementRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1)
    payment_date: str
    payment_mode: str = "Cash"

    @field_validator("payment_date")
    @classmethod
    def _valid_date(cls, v: str) -> str:
        return _check_date(v)


class ExpenseCreate(BaseModel):
    date: str
    head: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    notes: Optional[str] = None
    gst_enabled: bool = False
    gst_rate: Optional[float] = None
    gst_amount: Optional[float] = None
    invoice_number: Optional[str] = None
    vendor_name: Optional[str] = None

    @field_validator("date")
    @classmethod
    def _valid_date(cls, v: str) -> str:
        return _check_date(v)


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1)
    default_weight: float = Field(0, ge=0)
    wastage_percent: float = Field(0, ge=0)
    labour_cost: float = Field(0, ge=0)
    current_stock: float = 0
    is_active: bool = True


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    default_weight: Optional[float] = Field(None, ge=0)
    wastage_percent: Optional[float] = Field(None, ge=0)
    labour_cost: Optional[float] = Field(None, ge=0)


class JobWorkItemCreate(BaseModel):
    name: str = Field(..., min_length=1)
    rate: float = Field(0, ge=0)
    unit: str = "Piece"
    is_active: bool = True


class JobWorkItemUpdate(BaseModel):
    name: Optional[str] = None
    rate: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None


class PLReport(BaseModel):
    job_work_income: float
    product_sales_income: float
    general_expenses: float
    karigar_expenses: float
    total_expenses: float
    net_profit: float


class GSTSummaryItem(BaseModel):
    rate: float
    taxable_value: float = 0
    gst_amount: float = 0
    total_amount: float = 0
    type: Literal["output", "input"]


class DashboardStats(BaseModel):
    latest_rate: Optional[dict] = None
    total_silver_stock_kg: float
    pending_orders: int
    pending_value: float
    monthly_sales: float
    gst_payable: float
    products_made: float
