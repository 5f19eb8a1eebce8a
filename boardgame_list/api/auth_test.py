from fastapi import APIRouter, Depends, HTTPException

from boardgame_list.core.deps import enforce_policy, get_claim_set, get_policies
from boardgame_list.services.authorization import ClaimSet, PolicyRegistry

router = APIRouter()


@router.get("/{policy_name}")
def check_policy(
    policy_name: str,
    claims: ClaimSet = Depends(get_claim_set),
    policies: PolicyRegistry = Depends(get_policies),
):
    if policy_name not in policies:
        raise HTTPException(status_code=404, detail=f'Unknown policy "{policy_name}"')
    enforce_policy(policy_name, claims, policies)
    return {"policy": policy_name, "allowed": True}
