"""Wizard state machine and step validation, no database involved."""

import pytest

from app.custom_error import ValidationError
from app.models.onboarding_models import PersonalInfoStep, PricingStep, ServiceGalleryStep, ServicePricingInput
from app.services.worker_onboarding_services import OnboardingWizard

GALLERY = ["https://img/1.jpg", "https://img/2.jpg", "https://img/3.jpg"]


class TestTransitions:
    def test_new_profile_starts_at_step_one(self):
        assert OnboardingWizard.resume(None).current_step == 1

    def test_resumes_from_persisted_step(self):
        assert OnboardingWizard.resume({"setup_step": 3}).current_step == 3

    def test_completed_profile_reenters_at_step_one(self):
        wizard = OnboardingWizard.resume({"setup_step": 4, "setup_completed": True})
        assert wizard.current_step == 1
        assert wizard.unlocked_step == 3

    def test_back_is_local_and_stops_at_one(self):
        wizard = OnboardingWizard(persisted_step=3)
        assert wizard.go_back() == 2
        assert wizard.go_back() == 1
        assert wizard.go_back() == 1
        assert wizard.persisted_step == 3

    def test_forward_can_not_skip_unsubmitted_steps(self):
        wizard = OnboardingWizard(persisted_step=2)
        wizard.go_back()
        assert wizard.go_forward() == 2
        with pytest.raises(ValidationError):
            wizard.go_forward()

    def test_submitting_a_locked_step_is_rejected(self):
        wizard = OnboardingWizard(persisted_step=1)
        with pytest.raises(ValidationError) as exc_info:
            wizard.ensure_can_submit(3)
        assert exc_info.value.detail == "Please complete step 1 first"

    def test_persisted_step_never_decreases(self):
        wizard = OnboardingWizard(persisted_step=3)
        assert wizard.next_persisted_step(1) == 3
        assert wizard.complete_step(1) == 3
        assert wizard.current_step == 2

    def test_last_step_completes_setup(self):
        wizard = OnboardingWizard(persisted_step=3)
        assert wizard.complete_step(3) == 4
        assert wizard.setup_completed is True


class TestPersonalInfo:
    def test_requires_full_name(self):
        with pytest.raises(ValidationError) as exc_info:
            OnboardingWizard.validate_personal_info(PersonalInfoStep(full_name="  ", age=30))
        assert exc_info.value.detail == "Please enter your full name"

    def test_requires_numeric_age(self):
        with pytest.raises(ValidationError) as exc_info:
            OnboardingWizard.validate_personal_info(PersonalInfoStep(full_name="An", age="thirty"))
        assert exc_info.value.detail == "Please enter a valid age"

    @pytest.mark.parametrize("age", ["nan", "inf", "-inf", "0", "-3", "27.5"])
    def test_rejects_ages_that_are_not_whole_positive_numbers(self, age):
        with pytest.raises(ValidationError) as exc_info:
            OnboardingWizard.validate_personal_info(PersonalInfoStep(full_name="An", age=age))
        assert exc_info.value.detail == "Please enter a valid age"

    def test_returns_parsed_age(self):
        assert OnboardingWizard.validate_personal_info(PersonalInfoStep(full_name="An", age="27")) == 27


class TestServiceGallery:
    @pytest.mark.parametrize(
        "data, message",
        [
            (ServiceGalleryStep(gallery_images=GALLERY[:2], service_type="assistance", service_categories=["tour_guide"]), "Please upload at least 3 gallery images"),
            (ServiceGalleryStep(gallery_images=GALLERY), "Please select a service type"),
            (ServiceGalleryStep(gallery_images=GALLERY, service_type="assistance"), "Please select at least one service category"),
            (ServiceGalleryStep(gallery_images=GALLERY, service_type="companionship"), "Please select a service level"),
            (ServiceGalleryStep(gallery_images=GALLERY * 4, service_type="companionship", service_level=1), "Maximum 10 gallery images allowed"),
        ],
    )
    def test_rejections(self, data, message):
        with pytest.raises(ValidationError) as exc_info:
            OnboardingWizard.validate_service_gallery(data)
        assert exc_info.value.detail == message

    def test_companionship_with_level_is_valid(self):
        data = ServiceGalleryStep(gallery_images=GALLERY, service_type="companionship", service_level=2)
        assert OnboardingWizard.validate_service_gallery(data).value == "companionship"


class TestPricing:
    def test_first_category_without_rate_is_reported(self):
        data = PricingStep(service_pricing={"personal_assist": ServicePricingInput(hourly_rate=10), "tour_guide": ServicePricingInput(hourly_rate="")})
        with pytest.raises(ValidationError) as exc_info:
            OnboardingWizard.validate_pricing("assistance", ["personal_assist", "tour_guide"], data)
        assert exc_info.value.detail == "Please enter pricing for tour guide"

    def test_zero_rate_is_not_a_price(self):
        data = PricingStep(service_pricing={"translator": ServicePricingInput(hourly_rate=0)})
        with pytest.raises(ValidationError):
            OnboardingWizard.validate_pricing("assistance", ["translator"], data)

    @pytest.mark.parametrize("rate", [None, 0, -5, "x"])
    def test_companionship_needs_positive_rate(self, rate):
        with pytest.raises(ValidationError) as exc_info:
            OnboardingWizard.validate_pricing("companionship", [], PricingStep(hourly_rate=rate))
        assert exc_info.value.detail == "Please enter a valid hourly rate"

    def test_without_service_type(self):
        with pytest.raises(ValidationError) as exc_info:
            OnboardingWizard.validate_pricing(None, [], PricingStep(hourly_rate=10))
        assert exc_info.value.detail == "Please select a service type"
