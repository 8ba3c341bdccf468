"""Tests for the model attribute validation adapter."""

import pytest

from css_validator.core.validator import Validator
from css_validator.integrations.records import (
    ErrorCollection,
    CssAttributeValidator,
    validates_css,
    run_css_validations,
)
from .fakes import FakeRunner, MULTIPLE_ERRORS_REPORT, UNSTRUCTURED_FAILURE_REPORT

class Record:
    """Plain object with an error collection."""

    def __init__(self, **attributes):
        self.__dict__.update(attributes)
        self.errors = ErrorCollection()


class TestErrorCollection:
    """Tests for ErrorCollection."""

    def test_add_and_read(self):
        errors = ErrorCollection()
        assert not errors
        errors.add('custom_css', 'is broken')
        errors.add('custom_css', 'is still broken')
        errors.add('header_css', 'is broken')
        assert len(errors) == 3
        assert errors['custom_css'] == ['is broken', 'is still broken']
        assert errors['unknown'] == []
        assert errors.full_messages() == [
            'custom_css is broken',
            'custom_css is still broken',
            'header_css is broken',
        ]

    def test_clear(self):
        errors = ErrorCollection()
        errors.add('a', 'b')
        errors.clear()
        assert len(errors) == 0


class TestCssAttributeValidator:
    """Tests for CssAttributeValidator."""

    def test_valid_css_adds_nothing(self, validator):
        record = Record(custom_css="body { color: red; }")
        added = CssAttributeValidator(validator=validator).validate_each(
            record, 'custom_css', record.custom_css)
        assert added == 0
        assert not record.errors

    def test_detailed_messages(self, validator):
        record = Record()
        CssAttributeValidator(validator=validator).validate_each(
            record, 'custom_css', "body { colr: red; }")
        assert record.errors['custom_css'] == [
            "Line 1 (body): Property “colr” doesn't exist : red"
        ]

    def test_one_message_per_error(self, engine_jar, java_on_path):
        runner = FakeRunner(stdout=MULTIPLE_ERRORS_REPORT, exit_code=1)
        validator = Validator(jar_path=engine_jar, runner=runner)
        record = Record()

        added = CssAttributeValidator(validator=validator).validate_each(
            record, 'css', "body { x }")

        assert added == 3
        assert len(record.errors['css']) == 3

    def test_generic_message_without_records(self, engine_jar, java_on_path):
        runner = FakeRunner(stdout=UNSTRUCTURED_FAILURE_REPORT, exit_code=1)
        validator = Validator(jar_path=engine_jar, runner=runner)
        record = Record()

        CssAttributeValidator(validator=validator).validate_each(record, 'css', "body {")

        assert record.errors['css'] == ['contains invalid CSS']

    def test_custom_message(self, validator):
        record = Record()
        CssAttributeValidator(message='must be valid CSS', validator=validator).validate_each(
            record, 'css', "body { colr: red; }")
        assert record.errors['css'] == ['must be valid CSS']

    def test_short_message(self, validator):
        record = Record()
        CssAttributeValidator(full_messages=False, validator=validator).validate_each(
            record, 'css', "body { colr: red; }")
        assert record.errors['css'] == ['is invalid CSS']

    def test_profile_is_passed(self, validator, fake_runner):
        record = Record()
        CssAttributeValidator(profile='css3', validator=validator).validate_each(
            record, 'css', "body { color: red; }")
        assert '--profile=css3' in fake_runner.calls[0]['argv']

    @pytest.mark.parametrize('value', ['', '   ', None])
    def test_allow_blank(self, validator, fake_runner, value):
        record = Record()
        CssAttributeValidator(allow_blank=True, validator=validator).validate_each(
            record, 'css', value)
        assert not record.errors
        assert fake_runner.calls == []

    def test_allow_nil(self, validator, fake_runner):
        record = Record()
        CssAttributeValidator(allow_nil=True, validator=validator).validate_each(
            record, 'css', None)
        assert not record.errors
        assert fake_runner.calls == []

    def test_rejected_value_reports_failure(self, validator):
        record = Record()
        CssAttributeValidator(validator=validator).validate_each(record, 'css', None)
        assert record.errors['css'] == ['validation failed: CSS text cannot be None or empty']

    def test_missing_engine_reports_failure(self, tmp_path, monkeypatch, java_on_path):
        monkeypatch.setattr('css_validator.core.invoker.DEFAULT_JAR_PATH',
                            str(tmp_path / 'missing.jar'))
        record = Record()
        CssAttributeValidator().validate_each(record, 'css', "body { color: red; }")
        assert record.errors['css'][0].startswith('validation failed: CSS Validator JAR not found')


class TestValidatesCss:
    """Tests for the class decorator."""

    def test_decorated_class(self, validator):
        @validates_css('custom_css', validator=validator)
        @validates_css('optional_css', allow_blank=True, validator=validator)
        class Theme(Record):
            pass

        good = Theme(custom_css="body { color: red; }", optional_css='')
        assert run_css_validations(good)
        assert not good.errors

        bad = Theme(custom_css="body { colr: red; }", optional_css="p { colr: blue; }")
        assert not run_css_validations(bad)
        assert len(bad.errors['custom_css']) == 1
        assert len(bad.errors['optional_css']) == 1

    def test_conditions(self, validator, fake_runner):
        @validates_css('css_code', if_='css_enabled', validator=validator)
        @validates_css('other_css', unless=lambda record: record.skip_other, validator=validator)
        class Style(Record):
            def css_enabled(self):
                return self.enabled

        skipped = Style(css_code="body { colr: red; }", other_css="body { colr: red; }",
                        enabled=False, skip_other=True)
        assert run_css_validations(skipped)
        assert fake_runner.calls == []

        checked = Style(css_code="body { colr: red; }", other_css="body { colr: red; }",
                        enabled=True, skip_other=False)
        assert not run_css_validations(checked)
        assert len(fake_runner.calls) == 2

    def test_subclass_inherits_validators(self, validator):
        @validates_css('base_css', validator=validator)
        class Base(Record):
            pass

        @validates_css('extra_css', validator=validator)
        class Child(Base):
            pass

        assert [name for name, _ in Base.__css_validators__] == ['base_css']
        assert [name for name, _ in Child.__css_validators__] == ['base_css', 'extra_css']

    def test_undecorated_record(self):
        assert run_css_validations(Record(css="anything"))
