# grocery/api/routers/addresses.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from grocery.api.deps import get_current_user
from grocery.data.database import get_db
from grocery.data.models.user import UserModel
from grocery.domain.errors import ConflictError, NotFoundError
from grocery.domain.schemas import AddressCreate, AddressUpdate, AddressOut, DeletedOut
from grocery.services.address_service import AddressService
from grocery.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/address", tags=["addresses"])


@router.get("", response_model=List[AddressOut])
def list_addresses(user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    svc = AddressService(db)
    try:
        return svc.list_addresses(user.id)
    except Exception:
        logger.exception("GET /api/address failed")
        raise HTTPException(status_code=500, detail="Failed to fetch addresses")


@router.post("", response_model=AddressOut, status_code=201)
def create_address(
    payload: AddressCreate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = AddressService(db)
    try:
        return svc.create_address(user.id, payload)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception:
        logger.exception("POST /api/address failed")
        raise HTTPException(status_code=500, detail="Failed to create address")


@router.put("/{address_id}", response_model=AddressOut)
def update_address(
    address_id: int,
    payload: AddressUpdate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = AddressService(db)
    try:
        return svc.update_address(user.id, address_id, payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception:
        logger.exception(f"PUT /api/address/{address_id} failed")
        raise HTTPException(status_code=500, detail="Failed to update address")


@router.delete("/{address_id}", response_model=DeletedOut)
def delete_address(address_id: int, user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    svc = AddressService(db)
    try:
        return svc.delete_address(user.id, address_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        logger.exception(f"DELETE /api/address/{address_id} failed")
        raise HTTPException(status_code=500, detail="Failed to delete address")
