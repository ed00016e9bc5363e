"""
Operation Builder Tests

Covers signer compilation, document de-duplication, ordering and
the create-operation payload shape.

Run with: python -m pytest tests/test_operation_builder.py -v
"""

import pytest
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from forsign import (
    Attachment,
    AttachmentFileType,
    CheckboxFormField,
    DoubleAuthentication,
    FileInformation,
    FormFieldPosition,
    InputAttachmentType,
    InsecureRedirectUrlWarning,
    InvalidArgumentError,
    Language,
    Notification,
    OperationBuilder,
    OperationBuildError,
    SignatureInformation,
    SignatureType,
    Signer,
    TagPosition,
    TextFormField
)
from forsign.operation_builder import REDIRECT_URL_METADATA_KEY


CONTRACT = FileInformation('doc-1', 'contract.pdf')
ANNEX = FileInformation('doc-2', 'annex.pdf')


def make_signer(name='Jane Doe', email='jane@example.com'):
    signer = Signer(name=name, email=email)
    signer.notification = Notification.email(email)
    return signer


def make_builder(name='Service Agreement'):
    return OperationBuilder(name).set_language(Language.ENGLISH)


class TestBuildValidation:
    """build() rejects incomplete operations."""

    def test_empty_name(self):
        builder = OperationBuilder('').set_language(Language.ENGLISH).add_signer(make_signer())
        with pytest.raises(OperationBuildError, match="Operation name is required."):
            builder.build()

    def test_no_members(self):
        with pytest.raises(OperationBuildError, match="At least one member is required."):
            make_builder().build()

    def test_language_not_set(self):
        builder = OperationBuilder('Contract').add_signer(make_signer())
        with pytest.raises(OperationBuildError, match="Language is required."):
            builder.build()

    def test_language_from_string(self):
        request = OperationBuilder('Contract').set_language('pt-BR').add_signer(make_signer()).build()
        assert request.to_dict()['Language'] == 'pt-br'

    def test_unknown_language_string(self):
        with pytest.raises(InvalidArgumentError):
            OperationBuilder('Contract').set_language('fr-fr')

    @pytest.mark.parametrize('language', [None, '', '   ', 42])
    def test_missing_or_non_string_language(self, language):
        with pytest.raises(InvalidArgumentError):
            OperationBuilder('Contract').set_language(language)

    def test_operation_model_id_must_be_positive(self):
        with pytest.raises(InvalidArgumentError):
            make_builder().with_operation_model_id(0)


class TestMemberOrdering:
    """OrderPosition follows insertion order when ordering is required."""

    def test_ordered_members_numbered_from_one(self):
        request = (
            make_builder()
            .set_signers_order_requirement(True)
            .add_signer(make_signer('A', 'a@example.com'))
            .add_signer(make_signer('B', 'b@example.com'))
            .add_signer(make_signer('C', 'c@example.com'))
            .build()
        )
        members = request.to_dict()['Members']
        assert [m['OrderPosition'] for m in members] == [1, 2, 3]
        assert [m['Name'] for m in members] == ['A', 'B', 'C']
        assert request.to_dict()['Order'] is True

    def test_unordered_members_are_zero(self):
        request = (
            make_builder()
            .add_signer(make_signer('A', 'a@example.com'))
            .add_signer(make_signer('B', 'b@example.com'))
            .build()
        )
        assert [m['OrderPosition'] for m in request.to_dict()['Members']] == [0, 0]

    def test_order_flag_set_after_signers(self):
        request = (
            make_builder()
            .add_signer(make_signer('A', 'a@example.com'))
            .add_signer(make_signer('B', 'b@example.com'))
            .set_signers_order_requirement(True)
            .build()
        )
        assert [m.order_position for m in request.members] == [1, 2]


class TestDocumentRegistration:
    """Every referenced document appears exactly once in Files."""

    def test_signature_and_rubric_share_document(self):
        signer = make_signer()
        signer.add_signature_in_position(CONTRACT, 1, '10%', '20%')
        signer.add_rubric_in_position(CONTRACT, 2, '5%', '95%')

        request = make_builder().add_signer(signer).build()

        assert request.to_dict()['Files'] == [{'Id': 'doc-1', 'Description': 'contract.pdf'}]

    def test_documents_across_signers_deduplicated_in_order(self):
        first = make_signer('A', 'a@example.com')
        first.add_signature_in_position(CONTRACT, 1, '10%', '10%')
        first.add_signature_in_position(ANNEX, 1, '10%', '10%')
        second = make_signer('B', 'b@example.com')
        second.add_signature_in_position(ANNEX, 3, '20%', '20%')
        second.add_signature_in_position(CONTRACT, 2, '20%', '20%')

        request = make_builder().add_signer(first).add_signer(second).build()

        assert [f.id for f in request.files] == ['doc-1', 'doc-2']
        assert request.get_file('doc-2').description == 'annex.pdf'
        assert request.get_file('missing') is None

    def test_signature_position_round_trip(self):
        signer = make_signer()
        signer.add_signature_in_position(CONTRACT, 2, '50%', '50%')

        member = make_builder().add_signer(signer).build().to_dict()['Members'][0]

        assert member['Signatures'] == [{
            'DocumentId': 'doc-1',
            'PrintSignature': True,
            'Positions': [{'Page': 2, 'CoordenateX': '50%', 'CoordenateY': '50%'}],
        }]
        assert member['Rubrics'] == []

    def test_rubric_print_flag_kept(self):
        signer = make_signer()
        signer.add_rubric_in_position(CONTRACT, 1, '90%', '90%', print_signature=False)

        member = make_builder().add_signer(signer).build().to_dict()['Members'][0]

        assert member['Rubrics'][0]['PrintSignature'] is False

    def test_page_must_be_positive(self):
        with pytest.raises(InvalidArgumentError):
            make_signer().add_signature_in_position(CONTRACT, 0, '10%', '10%')

    @pytest.mark.parametrize('page', ['2', 1.0, True, None])
    def test_page_must_be_an_integer(self, page):
        with pytest.raises(InvalidArgumentError):
            make_signer().add_signature_in_position(CONTRACT, page, '10%', '10%')
        with pytest.raises(InvalidArgumentError):
            make_signer().add_rubric_in_position(CONTRACT, page, '10%', '10%')
        with pytest.raises(InvalidArgumentError):
            FormFieldPosition(CONTRACT, page, '10%', '10%')


class TestSignatureTypes:
    """Signature type selection on the compiled member."""

    def test_default_is_draw(self):
        member = make_builder().add_signer(make_signer()).build().to_dict()['Members'][0]
        assert member['SignatureType'] == SignatureType.DRAW.value

    def test_explicit_type(self):
        signer = make_signer()
        signer.signature_type = SignatureInformation.default(SignatureType.CERTIFICATE)
        member = make_builder().add_signer(signer).build().to_dict()['Members'][0]
        assert member['SignatureType'] == 7

    def test_automatic_stamp_sent_as_click(self):
        signer = make_signer()
        signer.signature_type = SignatureInformation.automatic_stamp('stamp-123')

        member = make_builder().add_signer(signer).build().to_dict()['Members'][0]

        assert member['SignatureType'] == 0
        assert 'stamp-123' not in str(member)

    def test_automatic_stamp_requires_id(self):
        with pytest.raises(InvalidArgumentError):
            SignatureInformation.automatic_stamp('')


class TestChannels:
    """Notification and double-authentication channel mapping."""

    def test_email_notification(self):
        signer = Signer(name='Jane', email='old@example.com')
        signer.notification = Notification.email('jane@example.com')

        member = make_builder().add_signer(signer).build().to_dict()['Members'][0]

        assert member['NotificationChannel'] == 0
        assert member['Email'] == 'jane@example.com'
        assert 'AuthenticationChannel' not in member

    def test_no_notification(self):
        signer = Signer(name='Jane', email='jane@example.com')
        signer.notification = Notification.none()

        member = make_builder().add_signer(signer).build().to_dict()['Members'][0]

        assert member['NotificationChannel'] == 3
        assert member['Email'] == 'jane@example.com'

    def test_sms_authentication_sets_phone(self):
        signer = make_signer()
        signer.double_authentication = DoubleAuthentication.sms('+5511999999999')

        member = make_builder().add_signer(signer).build().to_dict()['Members'][0]

        assert member['AuthenticationChannel'] == 1
        assert member['Phone'] == '+5511999999999'

    def test_whatsapp_authentication(self):
        signer = make_signer()
        signer.double_authentication = DoubleAuthentication.whatsapp('+5511988888888')

        member = make_builder().add_signer(signer).build().to_dict()['Members'][0]

        assert member['AuthenticationChannel'] == 2
        assert member['Phone'] == '+5511988888888'

    def test_email_authentication_overrides_email(self):
        signer = make_signer()
        signer.double_authentication = DoubleAuthentication.email('verify@example.com')

        member = make_builder().add_signer(signer).build().to_dict()['Members'][0]

        assert member['AuthenticationChannel'] == 0
        assert member['Email'] == 'verify@example.com'
        assert 'Phone' not in member

    def test_empty_contacts_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Notification.email('')
        with pytest.raises(InvalidArgumentError, match="Phone number"):
            DoubleAuthentication.sms('')
        with pytest.raises(InvalidArgumentError, match="Email"):
            DoubleAuthentication.email('')


class TestTagPosition:
    """Tag-based signature placement."""

    def test_tag_registers_document_and_flags_member(self):
        signer = make_signer()
        signer.set_tag_signature_position(TagPosition(ANNEX, '{{signature}}'))

        request = make_builder().add_signer(signer).build()
        member = request.to_dict()['Members'][0]

        assert member['HasSignatureTag'] is True
        assert member['SignPositionTag'] == '{{signature}}'
        assert [f.id for f in request.files] == ['doc-2']

    def test_without_tag(self):
        member = make_builder().add_signer(make_signer()).build().to_dict()['Members'][0]
        assert member['HasSignatureTag'] is False
        assert member['SignPositionTag'] is None

    def test_second_tag_rejected(self):
        signer = make_signer()
        signer.set_tag_signature_position(TagPosition(ANNEX, '{{a}}'))
        with pytest.raises(InvalidArgumentError):
            signer.set_tag_signature_position(TagPosition(ANNEX, '{{b}}'))

    def test_empty_tag_pattern_rejected(self):
        with pytest.raises(InvalidArgumentError):
            TagPosition(ANNEX, '')


class TestAttachmentsAndForms:
    """Attachment requests and form fields on the compiled member."""

    def test_attachment_dto(self):
        attachment = (
            Attachment('ID card', 'Front of your ID card', True, max_files=2)
            .permit_file_type(AttachmentFileType.PDF)
            .permit_file_type(AttachmentFileType.PNG)
            .permit_attachment_by_input(InputAttachmentType.UPLOAD_FILE)
        )
        signer = make_signer().request_attachment(attachment)

        member = make_builder().add_signer(signer).build().to_dict()['Members'][0]

        assert member['Attachments'] == [{
            'Id': 0,
            'Name': 'ID card',
            'Description': 'Front of your ID card',
            'Required': True,
            'FileType': ['pdf', 'png'],
            'FilesAllowed': 2,
            'InputAttachment': [4],
        }]

    def test_text_field_one_entry_per_position(self):
        field = (
            TextFormField('Full name')
            .with_instructions('As on your ID')
            .is_required()
            .on_position(FormFieldPosition(CONTRACT, 1, '10%', '20%'))
            .on_position(FormFieldPosition(ANNEX, 2, '30%', '40%'))
        )
        signer = make_signer().add_form_field(field)

        request = make_builder().add_signer(signer).build()
        entries = request.to_dict()['Members'][0]['FormFields']

        assert len(entries) == 2
        assert entries[0]['FieldType'] == 'Text'
        assert entries[0]['Max'] == 500
        assert entries[0]['Required'] is True
        assert entries[0]['DocumentId'] == 'doc-1'
        assert entries[0]['Positions'] == [{
            'Page': 1,
            'CoordenateX': '10%',
            'CoordenateY': '20%',
            'Height': '2.48%',
            'Width': '24.66%',
        }]
        assert entries[1]['DocumentId'] == 'doc-2'
        assert [f.id for f in request.files] == ['doc-1', 'doc-2']

    def test_checkbox_marks_selected_option(self):
        field = (
            CheckboxFormField('Plan')
            .with_options(['Basic', 'Premium'])
            .with_value('Premium')
            .on_position(FormFieldPosition(CONTRACT, 1, '10%', '20%'))
        )
        signer = make_signer().add_form_field(field)

        entry = make_builder().add_signer(signer).build().to_dict()['Members'][0]['FormFields'][0]

        assert entry['Variant'] == 'Checkbox'
        assert entry['FieldType'] == 'Select'
        assert [o['Value'] for o in entry['Options']] == ['', 'X']


class TestOperationSettings:
    """Operation-level options and optional payload keys."""

    def test_optional_keys_omitted_by_default(self):
        payload = make_builder().add_signer(make_signer()).build().to_dict()

        for key in ('OptionalMessage', 'ExpirationDate', 'ExternalId', 'OperationModelId', 'ManualFinish'):
            assert key not in payload
        assert payload['DisplayCover'] is True
        assert payload['Metadata'] == []
        assert payload['Groups'] == []

    def test_optional_settings(self):
        expiration = datetime(2030, 5, 1, 18, 30, 0)
        payload = (
            make_builder()
            .set_expiration_date(expiration)
            .with_external_id('crm-42')
            .with_optional_message('Please sign by Friday')
            .with_operation_model_id(7)
            .set_in_person_signing(True)
            .set_member_movement_warning(True)
            .set_display_cover(False)
            .add_group(3)
            .add_signer(make_signer())
            .build()
            .to_dict()
        )

        assert payload['ExpirationDate'] == '2030-05-01T18:30:00'
        assert payload['ExternalId'] == 'crm-42'
        assert payload['OptionalMessage'] == 'Please sign by Friday'
        assert payload['OperationModelId'] == 7
        assert payload['OnPremises'] is True
        assert payload['MemberMovementWarning'] is True
        assert payload['DisplayCover'] is False
        assert payload['Groups'] == [3]

    def test_manual_finish_carries_expiration(self):
        payload = (
            make_builder()
            .set_manual_finish(True)
            .set_expiration_date(datetime(2030, 1, 2, 3, 4, 5))
            .add_signer(make_signer())
            .build()
            .to_dict()
        )
        assert payload['ManualFinish'] == {'HasManualFinish': True, 'Date': '2030-01-02T03:04:05'}

    def test_metadata(self):
        request = (
            make_builder()
            .add_metadata('department', 'sales')
            .add_metadata('department', 'legal')
            .add_signer(make_signer())
            .build()
        )
        assert request.to_dict()['Metadata'] == [
            {'Key': 'department', 'Value': 'sales'},
            {'Key': 'department', 'Value': 'legal'},
        ]
        assert request.get_metadata('department') == ['sales', 'legal']

    def test_empty_metadata_key_rejected(self):
        with pytest.raises(InvalidArgumentError):
            make_builder().add_metadata('', 'value')


class TestRedirectUrl:
    """Redirect URL validation."""

    def test_https_stored_as_metadata(self):
        request = make_builder().with_redirect_url('https://example.com/done').add_signer(make_signer()).build()
        assert request.get_metadata(REDIRECT_URL_METADATA_KEY) == ['https://example.com/done']

    def test_http_warns(self):
        with pytest.warns(InsecureRedirectUrlWarning):
            builder = make_builder().with_redirect_url('http://example.com/done')
        request = builder.add_signer(make_signer()).build()
        assert request.get_metadata(REDIRECT_URL_METADATA_KEY) == ['http://example.com/done']

    def test_other_scheme_rejected(self):
        with pytest.raises(InvalidArgumentError):
            make_builder().with_redirect_url('ftp://example.com/file')

    def test_empty_rejected(self):
        with pytest.raises(InvalidArgumentError):
            make_builder().with_redirect_url('')
