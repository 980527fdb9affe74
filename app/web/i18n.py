"""UI strings in English and Kannada. Missing Kannada entries fall back to English."""

TRANSLATIONS: dict[str, dict[str, str]] = {
    "app_name": {"en": "Digital Seva", "kn": "ಡಿಜಿಟಲ್ ಸೇವಾ"},
    "center_name": {"en": "Digital Seva Center", "kn": "ಡಿಜಿಟಲ್ ಸೇವಾ ಕೇಂದ್ರ"},
    "tagline": {
        "en": "Comprehensive government service solutions at your fingertips.",
        "kn": "ನಿಮ್ಮ ಬೆರಳ ತುದಿಯಲ್ಲಿ ಸಮಗ್ರ ಸರ್ಕಾರಿ ಸೇವಾ ಪರಿಹಾರಗಳು.",
    },
    "home": {"en": "Home", "kn": "ಮುಖಪುಟ"},
    "services": {"en": "Services", "kn": "ಸೇವೆಗಳು"},
    "our_services": {"en": "Our Services", "kn": "ನಮ್ಮ ಸೇವೆಗಳು"},
    "get_started": {"en": "Get Started", "kn": "ಪ್ರಾರಂಭಿಸಿ"},
    "dashboard": {"en": "Dashboard", "kn": "ಡ್ಯಾಶ್‌ಬೋರ್ಡ್"},
    "my_dashboard": {"en": "My Dashboard", "kn": "ನನ್ನ ಡ್ಯಾಶ್‌ಬೋರ್ಡ್"},
    "dashboard_intro": {
        "en": "Track and manage your government service applications.",
        "kn": "ನಿಮ್ಮ ಸರ್ಕಾರಿ ಸೇವಾ ಅರ್ಜಿಗಳನ್ನು ಟ್ರ್ಯಾಕ್ ಮಾಡಿ ಮತ್ತು ನಿರ್ವಹಿಸಿ.",
    },
    "profile": {"en": "Profile", "kn": "ಪ್ರೊಫೈಲ್"},
    "login": {"en": "Login", "kn": "ಲಾಗಿನ್"},
    "logout": {"en": "Logout", "kn": "ಲಾಗ್ ಔಟ್"},
    "register": {"en": "Register", "kn": "ನೋಂದಣಿ"},
    "name": {"en": "Full Name", "kn": "ಪೂರ್ಣ ಹೆಸರು"},
    "email": {"en": "Email", "kn": "ಇಮೇಲ್"},
    "phone": {"en": "Phone", "kn": "ದೂರವಾಣಿ"},
    "password": {"en": "Password", "kn": "ಪಾಸ್‌ವರ್ಡ್"},
    "save": {"en": "Save Changes", "kn": "ಬದಲಾವಣೆಗಳನ್ನು ಉಳಿಸಿ"},
    "profile_saved": {"en": "Profile updated successfully!", "kn": "ಪ್ರೊಫೈಲ್ ಯಶಸ್ವಿಯಾಗಿ ನವೀಕರಿಸಲಾಗಿದೆ!"},
    "track_application": {"en": "Track Application", "kn": "ಅರ್ಜಿಯ ಸ್ಥಿತಿ ಪರಿಶೀಲಿಸಿ"},
    "enter_application_id": {"en": "Enter Application ID", "kn": "ಅರ್ಜಿ ಸಂಖ್ಯೆ ನಮೂದಿಸಿ"},
    "track_now": {"en": "Track Now", "kn": "ಟ್ರ್ಯಾಕ್ ಮಾಡಿ"},
    "apply_new_service": {"en": "Apply New Service", "kn": "ಹೊಸ ಸೇವೆಗಾಗಿ ಅರ್ಜಿ ಸಲ್ಲಿಸಿ"},
    "apply_for_service": {"en": "Apply for Service", "kn": "ಸೇವೆಗಾಗಿ ಅರ್ಜಿ ಸಲ್ಲಿಸಿ"},
    "apply_intro": {
        "en": "Complete the form below to submit your application.",
        "kn": "ನಿಮ್ಮ ಅರ್ಜಿಯನ್ನು ಸಲ್ಲಿಸಲು ಕೆಳಗಿನ ಫಾರ್ಮ್ ಅನ್ನು ಪೂರ್ಣಗೊಳಿಸಿ.",
    },
    "step_choose_service": {"en": "Step 1: Choose a Service", "kn": "ಹಂತ 1: ಸೇವೆಯನ್ನು ಆರಿಸಿ"},
    "step_upload_documents": {
        "en": "Step 2: Upload Documents for",
        "kn": "ಹಂತ 2: ದಾಖಲೆಗಳನ್ನು ಅಪ್‌ಲೋಡ್ ಮಾಡಿ",
    },
    "file_hint": {"en": "PDF, JPG, PNG (Max 5MB)", "kn": "PDF, JPG, PNG (ಗರಿಷ್ಠ 5MB)"},
    "continue": {"en": "Continue", "kn": "ಮುಂದುವರಿಸಿ"},
    "submit_application": {"en": "Submit Application", "kn": "ಅರ್ಜಿಯನ್ನು ಸಲ್ಲಿಸಿ"},
    "recent_applications": {"en": "Recent Applications", "kn": "ಇತ್ತೀಚಿನ ಅರ್ಜಿಗಳು"},
    "no_applications": {"en": "No applications yet", "kn": "ಇನ್ನೂ ಯಾವುದೇ ಅರ್ಜಿಗಳಿಲ್ಲ"},
    "no_applications_hint": {
        "en": "Start your first application by choosing a government service.",
        "kn": "ಸರ್ಕಾರಿ ಸೇವೆಯನ್ನು ಆರಿಸುವ ಮೂಲಕ ನಿಮ್ಮ ಮೊದಲ ಅರ್ಜಿಯನ್ನು ಪ್ರಾರಂಭಿಸಿ.",
    },
    "view_details": {"en": "View Details", "kn": "ವಿವರಗಳನ್ನು ವೀಕ್ಷಿಸಿ"},
    "delete_application": {"en": "Delete Application", "kn": "ಅರ್ಜಿಯನ್ನು ಅಳಿಸಿ"},
    "confirm_delete_application": {
        "en": "Are you sure you want to delete this application?",
        "kn": "ಈ ಅರ್ಜಿಯನ್ನು ಅಳಿಸಲು ನೀವು ಖಚಿತವಾಗಿ ಬಯಸುವಿರಾ?",
    },
    "id_label": {"en": "ID:", "kn": "ಗುರುತು:"},
    "service": {"en": "Service", "kn": "ಸೇವೆ"},
    "status": {"en": "Status", "kn": "ಸ್ಥಿತಿ"},
    "remarks": {"en": "Remarks", "kn": "ಟಿಪ್ಪಣಿಗಳು"},
    "submitted_on": {"en": "Submitted On", "kn": "ಸಲ್ಲಿಸಿದ ದಿನಾಂಕ"},
    "documents": {"en": "Documents", "kn": "ದಾಖಲೆಗಳು"},
    "total_applications": {"en": "Total Applications", "kn": "ಒಟ್ಟು ಅರ್ಜಿಗಳು"},
    "pending_processing": {"en": "Pending / Processing", "kn": "ಬಾಕಿ ಇದೆ / ಪ್ರಕ್ರಿಯೆಯಲ್ಲಿದೆ"},
    "completed": {"en": "Completed", "kn": "ಪೂರ್ಣಗೊಂಡಿದೆ"},
    "unknown_service": {"en": "Unknown service", "kn": "ಅಜ್ಞಾತ ಸೇವೆ"},
    "admin_dashboard": {"en": "Admin Dashboard", "kn": "ನಿರ್ವಾಹಕ ಡ್ಯಾಶ್‌ಬೋರ್ಡ್"},
    "admin_dashboard_intro": {"en": "Overview of all service applications."},
    "manage_services": {"en": "Manage Services"},
    "all_users": {"en": "All Users"},
    "search": {"en": "Search"},
    "applicant": {"en": "Applicant"},
    "update_status": {"en": "Update Status"},
    "add_service": {"en": "Add Service"},
    "service_name": {"en": "Service Name"},
    "description": {"en": "Description"},
    "required_documents_csv": {"en": "Required Documents (comma separated)"},
    "delete": {"en": "Delete"},
    "confirm_delete_service": {"en": "Are you sure you want to delete this service?"},
    "role": {"en": "Role"},
    "joined": {"en": "Joined Date"},
    "change_role": {"en": "Change Role"},
    "status_updated": {"en": "Status updated.", "kn": "ಸ್ಥಿತಿ ನವೀಕರಿಸಲಾಗಿದೆ."},
}

STATUS_LABELS: dict[str, dict[str, str]] = {
    "pending": {"en": "PENDING", "kn": "ಬಾಕಿ ಇದೆ"},
    "processing": {"en": "PROCESSING", "kn": "ಪ್ರಕ್ರಿಯೆಯಲ್ಲಿದೆ"},
    "completed": {"en": "COMPLETED", "kn": "ಪೂರ್ಣಗೊಂಡಿದೆ"},
    "rejected": {"en": "REJECTED", "kn": "ತಿರಸ್ಕರಿಸಲಾಗಿದೆ"},
}


def translate(key: str, lang: str) -> str:
    """Look up key in lang, falling back to English, then to the key itself."""
    entry = TRANSLATIONS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry["en"]


def status_label(status: str, lang: str) -> str:
    entry = STATUS_LABELS.get(status)
    if entry is None:
        return status.upper()
    return entry.get(lang) or entry["en"]
