"""Parent self-service routes: settings and managing partners."""

from fastapi import APIRouter

from mathwizard.core.dependencies import PartnerManagerDep
from mathwizard.schemas.parent import AddPartnerRequest, UpdateSettingsRequest
from mathwizard.utils.converters import parent_to_principal

router = APIRouter(prefix="/api/parent", tags=["Parent"])


@router.put("/settings/{email}", summary="Update parent settings")
def update_settings(
    email: str, req: UpdateSettingsRequest, partner_manager: PartnerManagerDep
) -> dict:
    parent = partner_manager.update_settings(email, req.name.strip())
    return {
        "success": True,
        "message": "Settings updated successfully",
        "user": parent_to_principal(parent).model_dump(exclude_none=True),
    }


@router.get("/partners/{email}", summary="List managing partners")
def list_partners(email: str, partner_manager: PartnerManagerDep) -> dict:
    return {"success": True, "partners": partner_manager.list_partners(email)}


@router.post("/partners/{email}", summary="Add a managing partner")
def add_partner(
    email: str, req: AddPartnerRequest, partner_manager: PartnerManagerDep
) -> dict:
    """Add a managing partner (at most four per parent)."""
    partners = partner_manager.add_partner(
        email, req.name, req.email.strip(), req.password
    )
    return {"success": True, "message": "Partner added successfully", "partners": partners}


@router.delete("/partners/{email}/{partner_email}", summary="Remove a managing partner")
def remove_partner(email: str, partner_email: str, partner_manager: PartnerManagerDep) -> dict:
    partners = partner_manager.remove_partner(email, partner_email)
    return {"success": True, "message": "Partner removed successfully", "partners": partners}
