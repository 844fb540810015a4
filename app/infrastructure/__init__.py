"""Infrastructure: Firestore repositories, credential verification, notifications."""
