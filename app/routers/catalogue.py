"""Expenses, products and job-work items: plain list/add/update/soft-delete routes."""

from fastapi import APIRouter, Depends

from app.models.schemas import (
    ExpenseCreate,
    JobWorkItemCreate,
    JobWorkItemUpdate,
    ProductCreate,
    ProductUpdate,
)
from app.routers.deps import get_expense_service, get_job_work_service, get_product_service
from app.services.expense_service import ExpenseService
from app.services.job_work_service import JobWorkService
from app.services.product_service import ProductService

router = APIRouter(tags=["catalogue"])


@router.get("/expenses")
async def list_expenses(expenses: ExpenseService = Depends(get_expense_service)):
    return await expenses.get_expenses()


@router.post("/expenses", status_code=201)
async def create_expense(expense: ExpenseCreate, expenses: ExpenseService = Depends(get_expense_service)):
    return await expenses.create_expense(expense)


@router.get("/products")
async def list_products(products: ProductService = Depends(get_product_service)):
    return await products.get_products()


@router.post("/products", status_code=201)
async def add_product(product: ProductCreate, products: ProductService = Depends(get_product_service)):
    return await products.add_product(product)


@router.patch("/products/{product_id}")
async def update_product(product_id: str, updates: ProductUpdate, products: ProductService = Depends(get_product_service)):
    await products.update_product(product_id, updates)
    return {"status": "ok"}


@router.delete("/products/{product_id}")
async def delete_product(product_id: str, products: ProductService = Depends(get_product_service)):
    await products.delete_product(product_id)
    return {"status": "ok"}


@router.get("/job-work")
async def list_job_work(job_work: JobWorkService = Depends(get_job_work_service)):
    return await job_work.get_job_work_items()


@router.post("/job-work", status_code=201)
async def add_job_work(item: JobWorkItemCreate, job_work: JobWorkService = Depends(get_job_work_service)):
    return await job_work.add_job_work_item(item)


@router.patch("/job-work/{item_id}")
async def update_job_work(item_id: str, updates: JobWorkItemUpdate, job_work: JobWorkService = Depends(get_job_work_service)):
    await job_work.update_job_work_item(item_id, updates)
    return {"status": "ok"}


@router.delete("/job-work/{item_id}")
async def delete_job_work(item_id: str, job_work: JobWorkService = Depends(get_job_work_service)):
    await job_work.delete_job_work_item(item_id)
    return {"status": "ok"}
