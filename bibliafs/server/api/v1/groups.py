"""
Study Group Endpoints.

Membership roles gate the actions: the leader manages the group and its
members, leaders and moderators handle invites, and any member may chat and
schedule meetings. Free-plan trial and size limits are enforced through
``GroupAccessPolicy``; its ``GroupAccessError`` answers 403.
"""

import secrets
import string
from datetime import timedelta
from typing import Any, Dict, List, Optional, Sequence

from fastapi import APIRouter, HTTPException, Response, status

from bibliafs.core.database.base import utc_now
from bibliafs.core.database.entities.groups import (
    GroupInvite,
    GroupMeeting,
    GroupMember,
    GroupMessage,
    GroupRole,
    InviteStatus,
    StudyGroup,
)
from bibliafs.core.logging_config import get_logger
from bibliafs.core.models.io.groups import (
    GroupCreate,
    GroupUpdate,
    InviteAccept,
    InviteCreate,
    MeetingCreate,
    MeetingUpdate,
    MemberRoleUpdate,
    MessageCreate,
)
from bibliafs.groups import GroupLimits
from bibliafs.notifications import PushPayload
from bibliafs.server.auth import CurrentUser
from bibliafs.server.services.deps import GroupPolicyDep, PushServiceDep, RepoBundleDep

logger = get_logger(__name__)
router = APIRouter(tags=["groups"])

MIN_GROUP_NAME_LENGTH = 3
INVITE_CODE_LENGTH = 8
INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits
INVITE_TTL = timedelta(days=7)
STAFF_ROLES = (GroupRole.LEADER.value, GroupRole.MODERATOR.value)


def generate_invite_code() -> str:
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


# =====================================================================
# Lookups shared by the group and discussion routes
# =====================================================================


async def get_group_or_404(group_id: int, repos) -> StudyGroup:
    group = await repos.groups.get_by_id(group_id)
    if group is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
    return group


async def require_member(group_id: int, user_id: str, repos) -> GroupMember:
    membership = await repos.group_members.get_membership(group_id, user_id)
    if membership is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You are not a member of this group")
    return membership


async def require_role(group_id: int, user_id: str, repos, roles: Sequence[str]) -> GroupMember:
    membership = await require_member(group_id, user_id, repos)
    if membership.role not in roles:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient group permissions")
    return membership


async def _led_group(group_id: int, user_id: str, repos) -> StudyGroup:
    group = await repos.groups.get_by_id(group_id)
    if group is None or group.leader_id != user_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
    return group


async def _leader_only(group_id: int, user_id: str, repos) -> StudyGroup:
    group = await get_group_or_404(group_id, repos)
    if group.leader_id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the leader can manage members")
    return group


def _with_user(row: Any, user: Any, **extra: Any) -> Dict[str, Any]:
    return {
        **row.model_dump(),
        "user_name": user.display_name if user is not None else None,
        "user_email": user.email if user is not None else None,
        **extra,
    }


# =====================================================================
# Groups
# =====================================================================


@router.get("/groups", response_model=List[StudyGroup], summary="Public Groups")
async def list_public_groups(user: CurrentUser, repos: RepoBundleDep) -> List[StudyGroup]:
    return await repos.groups.list_public()


@router.get(
    "/groups/limits",
    response_model=GroupLimits,
    summary="Group Plan Limits",
    description="Trial state and the free-plan create, join and size limits for the current user.",
)
async def group_limits(user: CurrentUser, policy: GroupPolicyDep) -> GroupLimits:
    return await policy.limits(user)


@router.get("/groups/my", summary="My Groups", description="Groups the user belongs to, with role and join date.")
async def my_groups(user: CurrentUser, repos: RepoBundleDep) -> List[Dict[str, Any]]:
    rows = await repos.groups.list_for_member(user.id)
    return [{**group.model_dump(), "role": member.role, "joined_at": member.joined_at} for group, member in rows]


@router.get(
    "/groups/{group_id}",
    response_model=StudyGroup,
    summary="Get Group",
    responses={404: {"description": "Group not found"}},
)
async def get_group(group_id: int, user: CurrentUser, repos: RepoBundleDep) -> StudyGroup:
    return await get_group_or_404(group_id, repos)


@router.post(
    "/groups",
    response_model=StudyGroup,
    status_code=status.HTTP_201_CREATED,
    summary="Create Group",
    description="The creator becomes the group's leader.",
    responses={400: {"description": "Name too short"}, 403: {"description": "Trial expired or create limit reached"}},
)
async def create_group(body: GroupCreate, user: CurrentUser, repos: RepoBundleDep, policy: GroupPolicyDep) -> StudyGroup:
    name = (body.name or "").strip()
    if len(name) < MIN_GROUP_NAME_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Group name must have at least {MIN_GROUP_NAME_LENGTH} characters",
        )
    await policy.ensure_can_create(user)

    group = StudyGroup(
        name=name,
        description=body.description,
        is_public=body.is_public,
        image_url=body.image_url,
        leader_id=user.id,
    )
    group = await repos.groups.create_with_leader(group)
    logger.info(f"Group {group.id} created by {user.id}")
    return group


@router.patch(
    "/groups/{group_id}",
    response_model=StudyGroup,
    summary="Update Group",
    responses={404: {"description": "Group not found or not led by the user"}},
)
async def update_group(group_id: int, body: GroupUpdate, user: CurrentUser, repos: RepoBundleDep) -> StudyGroup:
    group = await _led_group(group_id, user.id, repos)
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(group, field, value)
    return await repos.groups.update(group)


@router.delete(
    "/groups/{group_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Group",
    responses={404: {"description": "Group not found or not led by the user"}},
)
async def delete_group(group_id: int, user: CurrentUser, repos: RepoBundleDep) -> Response:
    await _led_group(group_id, user.id, repos)
    await repos.groups.delete(group_id)
    logger.info(f"Group {group_id} deleted by {user.id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =====================================================================
# Members
# =====================================================================


@router.get("/groups/{group_id}/members", summary="Group Members")
async def list_members(group_id: int, user: CurrentUser, repos: RepoBundleDep) -> List[Dict[str, Any]]:
    await get_group_or_404(group_id, repos)
    rows = await repos.group_members.list_with_users(group_id)
    return [_with_user(member, member_user) for member, member_user in rows]


@router.patch(
    "/groups/{group_id}/members/{member_id}",
    response_model=GroupMember,
    summary="Change Member Role",
    responses={400: {"description": "Invalid role"}, 403: {"description": "Not the leader"}},
)
async def update_member_role(
    group_id: int, member_id: int, body: MemberRoleUpdate, user: CurrentUser, repos: RepoBundleDep
) -> GroupMember:
    await _leader_only(group_id, user.id, repos)
    if body.role not in (GroupRole.MODERATOR.value, GroupRole.MEMBER.value):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Role must be moderator or member")
    member = await repos.group_members.get_by_id(member_id)
    if member is None or member.group_id != group_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")
    if member.role == GroupRole.LEADER.value:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="The leader's role cannot be changed")
    member.role = body.role
    return await repos.group_members.update(member)


@router.delete(
    "/groups/{group_id}/members/{member_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove Member",
    responses={400: {"description": "Cannot remove the leader"}, 403: {"description": "Not the leader"}},
)
async def remove_member(group_id: int, member_id: int, user: CurrentUser, repos: RepoBundleDep) -> Response:
    group = await _leader_only(group_id, user.id, repos)
    member = await repos.group_members.get_by_id(member_id)
    if member is None or member.group_id != group_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")
    if member.user_id == group.leader_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="The leader cannot be removed")
    await repos.group_members.remove(group_id, member.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/groups/{group_id}/join",
    response_model=GroupMember,
    summary="Join Public Group",
    responses={
        400: {"description": "Already a member"},
        403: {"description": "Private group, trial expired or plan limit reached"},
        404: {"description": "Group not found"},
    },
)
async def join_group(group_id: int, user: CurrentUser, repos: RepoBundleDep, policy: GroupPolicyDep) -> GroupMember:
    group = await get_group_or_404(group_id, repos)
    if not group.is_public:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="This group is private")
    if await repos.group_members.get_membership(group_id, user.id) is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You are already a member of this group")
    await policy.ensure_can_join(user)
    await policy.ensure_member_capacity(group)
    return await repos.group_members.add(group_id, user.id)


@router.post(
    "/groups/{group_id}/leave",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Leave Group",
    responses={400: {"description": "Leader cannot leave"}, 404: {"description": "Not a member"}},
)
async def leave_group(group_id: int, user: CurrentUser, repos: RepoBundleDep) -> Response:
    group = await get_group_or_404(group_id, repos)
    if group.leader_id == user.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="The leader cannot leave the group")
    if not await repos.group_members.remove(group_id, user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="You are not a member of this group")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =====================================================================
# Messages
# =====================================================================


@router.get("/groups/{group_id}/messages", summary="Group Chat")
async def list_messages(group_id: int, user: CurrentUser, repos: RepoBundleDep) -> List[Dict[str, Any]]:
    await require_member(group_id, user.id, repos)
    rows = await repos.group_messages.list_with_users(group_id)
    return [_with_user(message, author) for message, author in rows]


@router.post(
    "/groups/{group_id}/messages",
    response_model=GroupMessage,
    status_code=status.HTTP_201_CREATED,
    summary="Send Message",
    responses={400: {"description": "Empty message"}, 403: {"description": "Not a member or trial expired"}},
)
async def send_message(
    group_id: int, body: MessageCreate, user: CurrentUser, repos: RepoBundleDep, policy: GroupPolicyDep
) -> GroupMessage:
    await require_member(group_id, user.id, repos)
    await policy.ensure_trial_active(user)
    content = (body.content or "").strip()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Message content is required")
    message = GroupMessage(
        group_id=group_id,
        user_id=user.id,
        content=content,
        reply_to_id=body.reply_to_id,
        verse_reference=body.verse_reference,
        verse_text=body.verse_text,
        message_type=body.message_type,
    )
    return await repos.group_messages.create(message)


@router.delete(
    "/groups/{group_id}/messages/{message_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Own Message",
    responses={404: {"description": "Message not found or not owned"}},
)
async def delete_message(group_id: int, message_id: int, user: CurrentUser, repos: RepoBundleDep) -> Response:
    message = await repos.group_messages.get_owned(message_id, user.id)
    if message is None or message.group_id != group_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")
    await repos.group_messages.delete_owned(message_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =====================================================================
# Invites
# =====================================================================


async def _unique_invite_code(repos) -> str:
    code = generate_invite_code()
    while await repos.group_invites.code_exists(code):
        code = generate_invite_code()
    return code


@router.post(
    "/groups/{group_id}/invites",
    response_model=GroupInvite,
    status_code=status.HTTP_201_CREATED,
    summary="Invite to Group",
    description="Invite by email or phone. An invited email that belongs to a user also gets a push notification.",
    responses={
        400: {"description": "No contact, duplicate pending invite or already a member"},
        403: {"description": "Not staff, trial expired or group full"},
    },
)
async def create_invite(
    group_id: int,
    body: InviteCreate,
    user: CurrentUser,
    repos: RepoBundleDep,
    policy: GroupPolicyDep,
    push: PushServiceDep,
) -> GroupInvite:
    group = await get_group_or_404(group_id, repos)
    await require_role(group_id, user.id, repos, STAFF_ROLES)
    await policy.ensure_trial_active(user)
    await policy.ensure_member_capacity(group)

    email = (body.email or "").strip() or None
    phone = (body.phone or "").strip() or None
    if not email and not phone:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email or phone is required")
    if email:
        if await repos.group_invites.has_pending_for_email(group_id, email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="A pending invite already exists for this email"
            )
        if await repos.group_members.is_member_email(group_id, email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="This user is already a member")

    invite = await repos.group_invites.create(
        GroupInvite(
            group_id=group_id,
            invited_by=user.id,
            invited_email=email,
            invited_phone=phone,
            invite_code=await _unique_invite_code(repos),
            expires_at=utc_now() + INVITE_TTL,
        )
    )

    if email:
        invited = await repos.users.get_by_email(email)
        if invited is not None:
            await push.send(
                invited.id,
                PushPayload(
                    title="Convite de Grupo",
                    body=f'Você foi convidado para o grupo "{group.name}"',
                    tag="group-invite",
                    data={"url": f"/groups?code={invite.invite_code}", "type": "group_invite"},
                ),
            )
    logger.info(f"Invite {invite.invite_code} created for group {group_id}")
    return invite


@router.get("/groups/{group_id}/invites", response_model=List[GroupInvite], summary="Group Invites")
async def list_invites(group_id: int, user: CurrentUser, repos: RepoBundleDep) -> List[GroupInvite]:
    await require_role(group_id, user.id, repos, STAFF_ROLES)
    return await repos.group_invites.list_for_group(group_id)


@router.get("/invites/pending", summary="My Pending Invites")
async def pending_invites(user: CurrentUser, repos: RepoBundleDep) -> List[Dict[str, Any]]:
    if not user.email:
        return []
    rows = await repos.group_invites.list_pending_for_email(user.email)
    return [{**invite.model_dump(), "group": group.model_dump()} for invite, group in rows]


def _invite_usable(invite: Optional[GroupInvite]) -> bool:
    if invite is None or invite.status != InviteStatus.PENDING.value:
        return False
    return invite.expires_at is None or invite.expires_at >= utc_now()


@router.post(
    "/invites/accept",
    summary="Accept Invite",
    responses={400: {"description": "Missing, unknown, used or expired code"}},
)
async def accept_invite(body: InviteAccept, user: CurrentUser, repos: RepoBundleDep) -> Dict[str, Any]:
    if not body.code:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invite code is required")
    invite = await repos.group_invites.get_by_code(body.code.strip().upper())
    if not _invite_usable(invite):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or expired invite")

    if await repos.group_members.get_membership(invite.group_id, user.id) is None:
        await repos.group_members.add(invite.group_id, user.id)
    invite.status = InviteStatus.ACCEPTED.value
    await repos.group_invites.update(invite)
    return {"success": True, "group_id": invite.group_id}


# =====================================================================
# Meetings
# =====================================================================


async def _created_meeting(group_id: int, meeting_id: int, user_id: str, repos) -> GroupMeeting:
    meeting = await repos.group_meetings.get_by_id(meeting_id)
    if meeting is None or meeting.group_id != group_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meeting not found")
    if meeting.created_by != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the creator can change this meeting")
    return meeting


@router.get("/groups/{group_id}/meetings", response_model=List[GroupMeeting], summary="Group Meetings")
async def list_meetings(group_id: int, user: CurrentUser, repos: RepoBundleDep) -> List[GroupMeeting]:
    await require_member(group_id, user.id, repos)
    return await repos.group_meetings.list_for_group(group_id)


@router.post(
    "/groups/{group_id}/meetings",
    response_model=GroupMeeting,
    status_code=status.HTTP_201_CREATED,
    summary="Schedule Meeting",
)
async def create_meeting(
    group_id: int, body: MeetingCreate, user: CurrentUser, repos: RepoBundleDep, policy: GroupPolicyDep
) -> GroupMeeting:
    await require_member(group_id, user.id, repos)
    await policy.ensure_trial_active(user)
    values = body.model_dump()
    values["title"] = (values.get("title") or "").strip() or "Reunião"
    return await repos.group_meetings.create(GroupMeeting(group_id=group_id, created_by=user.id, **values))


@router.patch("/groups/{group_id}/meetings/{meeting_id}", response_model=GroupMeeting, summary="Update Meeting")
async def update_meeting(
    group_id: int, meeting_id: int, body: MeetingUpdate, user: CurrentUser, repos: RepoBundleDep
) -> GroupMeeting:
    meeting = await _created_meeting(group_id, meeting_id, user.id, repos)
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(meeting, field, value)
    return await repos.group_meetings.update(meeting)


@router.delete(
    "/groups/{group_id}/meetings/{meeting_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Cancel Meeting"
)
async def delete_meeting(group_id: int, meeting_id: int, user: CurrentUser, repos: RepoBundleDep) -> Response:
    await _created_meeting(group_id, meeting_id, user.id, repos)
    await repos.group_meetings.delete(meeting_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
