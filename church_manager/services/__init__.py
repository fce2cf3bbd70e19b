from church_manager.services.church_service import ChurchService
from church_manager.services.member_service import MemberService
from church_manager.services.sync_service import SyncReport, SyncService, SyncTransport
