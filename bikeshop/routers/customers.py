# bikeshop/routers/customers.py
"""Customer records — list/search, create, edit, guarded delete."""

from fastapi import APIRouter, Depends, status
from typing import Optional
from bikeshop.schemas.customer import CustomerCreate, CustomerOut, CustomerUpdate
from bikeshop.services import customer_service
from bikeshop.services.store import ShopStore, get_store

router = APIRouter()


@router.get("/customers", response_model=list[CustomerOut], summary="List customers")
async def list_customers(search: Optional[str] = None, store: ShopStore = Depends(get_store)):
    """Customers ordered by name. `search` matches name or email."""
    return await customer_service.list_customers(store, search)


@router.get("/customers/{customer_id}", response_model=CustomerOut)
async def get_customer(customer_id: int, store: ShopStore = Depends(get_store)):
    return await customer_service.get_customer(store, customer_id)


@router.post("/customers", response_model=CustomerOut, status_code=status.HTTP_201_CREATED,
             summary="Add a customer")
async def create_customer(body: CustomerCreate, store: ShopStore = Depends(get_store)):
    return await customer_service.create_customer(store, body.name, body.email, body.phone)


@router.put("/customers/{customer_id}", response_model=CustomerOut, summary="Edit a customer")
async def update_customer(customer_id: int, body: CustomerUpdate, store: ShopStore = Depends(get_store)):
    return await customer_service.update_customer(store, customer_id, body.model_dump(exclude_unset=True))


@router.delete("/customers/{customer_id}", summary="Remove a customer")
async def delete_customer(customer_id: int, store: ShopStore = Depends(get_store)):
    """Refused with 409 while the customer has an open repair or an active rental."""
    await customer_service.delete_customer(store, customer_id)
    return {"id": customer_id, "status": "deleted"}
