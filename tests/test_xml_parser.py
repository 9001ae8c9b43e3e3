"""
Tests for Namecheap XML parser module.
"""

import logging
from datetime import datetime

import pytest

from conftest import envelope, error_envelope
from namecheap_client.exceptions import (
    NamecheapAPIError,
    NamecheapResponseError,
    NamecheapXMLError,
)
from namecheap_client.xml_parser import XMLParser


class TestParseResponse:
    """Tests for envelope parsing."""

    def test_parse_ok_envelope(self):
        response = XMLParser.parse_response(envelope("namecheap.domains.check", ""))
        assert response.success
        assert response.status == "OK"
        assert response.command == "namecheap.domains.check"
        assert response.server == "PHX01SBAPI01"
        assert response.execution_time == pytest.approx(0.032)
        assert response.warnings == []

    def test_parse_accepts_str(self):
        xml = envelope("namecheap.domains.check", "").decode("utf-8")
        assert XMLParser.parse_response(xml).success

    def test_error_status_raises_api_error(self):
        xml = error_envelope((2019166, "Domain not found"))
        with pytest.raises(NamecheapAPIError) as exc_info:
            XMLParser.parse_response(xml)
        assert exc_info.value.message == "Domain not found"
        assert exc_info.value.code == 2019166
        assert exc_info.value.errors == [(2019166, "Domain not found")]

    def test_multiple_errors_joined(self):
        xml = error_envelope((1011102, "Parameter APIKey is missing"), (1010104, "Parameter Command is missing"))
        with pytest.raises(NamecheapAPIError) as exc_info:
            XMLParser.parse_response(xml)
        assert exc_info.value.message == "Parameter APIKey is missing,Parameter Command is missing"
        assert len(exc_info.value.errors) == 2

    def test_error_status_case_insensitive(self):
        xml = error_envelope((500000, "Failure")).replace(b'Status="ERROR"', b'Status="error"')
        with pytest.raises(NamecheapAPIError):
            XMLParser.parse_response(xml)

    def test_error_without_error_elements(self):
        xml = b'<ApiResponse Status="ERROR" xmlns="http://api.namecheap.com/xml.response"><Errors /></ApiResponse>'
        with pytest.raises(NamecheapAPIError) as exc_info:
            XMLParser.parse_response(xml)
        assert exc_info.value.message == "Unknown API error"
        assert exc_info.value.errors == []

    def test_missing_status_raises_response_error(self):
        xml = b'<ApiResponse xmlns="http://api.namecheap.com/xml.response" />'
        with pytest.raises(NamecheapResponseError):
            XMLParser.parse_response(xml)

    def test_malformed_xml_raises_xml_error(self):
        with pytest.raises(NamecheapXMLError):
            XMLParser.parse_response(b"<ApiResponse Status=")

    def test_empty_body_raises_xml_error(self):
        with pytest.raises(NamecheapXMLError):
            XMLParser.parse_response(b"")

    def test_warnings_are_logged(self, caplog):
        xml = envelope("namecheap.domains.check", "", warnings="<Warning>Slow down</Warning>")
        with caplog.at_level(logging.WARNING, logger="namecheap.parser"):
            response = XMLParser.parse_response(xml)
        assert response.warnings == ["Slow down"]
        assert "Slow down" in caplog.text


class TestErrorEnvelopeForEveryCommand:
    """Every mapper rejects an ERROR envelope before reading the body."""

    @pytest.mark.parametrize("parse", [
        XMLParser.parse_domain_check,
        XMLParser.parse_domain_create,
        XMLParser.parse_domain_info,
        XMLParser.parse_domain_list,
        XMLParser.parse_domain_contacts,
        XMLParser.parse_domain_set_contacts,
        XMLParser.parse_registrar_lock,
        XMLParser.parse_set_registrar_lock,
        XMLParser.parse_tld_list,
        XMLParser.parse_domain_renew,
        XMLParser.parse_domain_reactivate,
        XMLParser.parse_pricing,
    ])
    def test_error_status(self, parse):
        with pytest.raises(NamecheapAPIError) as exc_info:
            parse(error_envelope((2019166, "Domain not found")))
        assert exc_info.value.code == 2019166
        assert "Domain not found" in str(exc_info.value)


class TestMissingContainer:
    """Mappers that need a result element raise NamecheapResponseError without it."""

    @pytest.mark.parametrize("parse, command", [
        (XMLParser.parse_domain_create, "namecheap.domains.create"),
        (XMLParser.parse_domain_info, "namecheap.domains.getInfo"),
        (XMLParser.parse_domain_list, "namecheap.domains.getList"),
        (XMLParser.parse_domain_contacts, "namecheap.domains.getContacts"),
        (XMLParser.parse_domain_set_contacts, "namecheap.domains.setContacts"),
        (XMLParser.parse_registrar_lock, "namecheap.domains.getRegistrarLock"),
        (XMLParser.parse_set_registrar_lock, "namecheap.domains.setRegistrarLock"),
        (XMLParser.parse_tld_list, "namecheap.domains.getTldList"),
        (XMLParser.parse_domain_renew, "namecheap.domains.renew"),
        (XMLParser.parse_domain_reactivate, "namecheap.domains.reActivate"),
        (XMLParser.parse_pricing, "namecheap.users.getPricing"),
    ])
    def test_empty_command_response(self, parse, command):
        with pytest.raises(NamecheapResponseError):
            parse(envelope(command, ""))

    def test_missing_command_response(self):
        xml = b'<ApiResponse Status="OK" xmlns="http://api.namecheap.com/xml.response" />'
        with pytest.raises(NamecheapResponseError):
            XMLParser.parse_domain_info(xml)

    def test_check_without_results_is_empty(self):
        result = XMLParser.parse_domain_check(envelope("namecheap.domains.check", ""))
        assert result.results == []


class TestParseDomainCheck:
    """Tests for namecheap.domains.check."""

    CHECK_BODY = '''
    <DomainCheckResult Domain="example.com" Available="false" ErrorNo="0" Description=""
        IsPremiumName="false" PremiumRegistrationPrice="0" PremiumRenewalPrice="0"
        PremiumRestorePrice="0" PremiumTransferPrice="0" IcannFee="0" EapFee="0" />
    <DomainCheckResult Domain="us.xyz" Available="true" ErrorNo="0" Description=""
        IsPremiumName="true" PremiumRegistrationPrice="13000.0000" PremiumRenewalPrice="13000.0000"
        PremiumRestorePrice="65.0000" PremiumTransferPrice="13000.0000" IcannFee="0.1800" EapFee="0.0000" />
    <DomainCheckResult Domain="bad.zzz" Available="false" ErrorNo="2030280" Description="TLD is not supported" />
    '''

    def test_parse_results(self):
        result = XMLParser.parse_domain_check(envelope("namecheap.domains.check", self.CHECK_BODY))

        assert len(result.results) == 3

        taken = result.results[0]
        assert taken.domain == "example.com"
        assert taken.available is False
        assert taken.is_premium_name is False
        assert taken.message is None

        premium = result.results[1]
        assert premium.available is True
        assert premium.is_premium_name is True
        assert premium.premium_registration_price == 13000.0
        assert premium.icann_fee == pytest.approx(0.18)

        unsupported = result.results[2]
        assert unsupported.error_no == 2030280
        assert unsupported.message == "TLD is not supported"

    def test_is_available(self):
        result = XMLParser.parse_domain_check(envelope("namecheap.domains.check", self.CHECK_BODY))
        assert result.is_available("us.xyz") is True
        assert result.is_available("example.com") is False

    def test_single_result_fields(self):
        body = '''<DomainCheckResult Domain="example.com" Available="true" IsPremiumName="false"
            IcannFee="0.18" PremiumRegistrationPrice="0" />'''
        item = XMLParser.parse_domain_check(envelope("namecheap.domains.check", body)).results[0]
        assert item.domain == "example.com"
        assert item.available is True
        assert item.is_premium_name is False
        assert item.icann_fee == pytest.approx(0.18)
        assert item.premium_registration_price == 0.0

    def test_malformed_optional_attributes_use_defaults(self):
        body = '<DomainCheckResult Domain="example.com" IcannFee="n/a" ErrorNo="x" />'
        item = XMLParser.parse_domain_check(envelope("namecheap.domains.check", body)).results[0]
        assert item.icann_fee == 0.0
        assert item.error_no == 0
        assert item.available is False

    def test_available_is_case_insensitive(self):
        body = '<DomainCheckResult Domain="a.com" Available="True" />'
        result = XMLParser.parse_domain_check(envelope("namecheap.domains.check", body))
        assert result.results[0].available is True

    def test_non_true_is_false(self):
        body = '<DomainCheckResult Domain="a.com" Available="yes" />'
        result = XMLParser.parse_domain_check(envelope("namecheap.domains.check", body))
        assert result.results[0].available is False


class TestParseDomainCreate:
    """Tests for namecheap.domains.create."""

    CREATE_BODY = '''
    <DomainCreateResult Domain="example.com" Registered="true" ChargedAmount="20.3600"
        DomainID="9007" OrderID="196074" TransactionID="380716" WhoisguardEnable="false"
        NonRealTimeDomain="false" />
    '''

    def test_parse_create(self):
        result = XMLParser.parse_domain_create(envelope("namecheap.domains.create", self.CREATE_BODY))
        assert result.domain == "example.com"
        assert result.registered is True
        assert result.charged_amount == pytest.approx(20.36)
        assert result.domain_id == 9007
        assert result.order_id == 196074
        assert result.transaction_id == 380716
        assert result.whoisguard_enabled is False


class TestParseDomainInfo:
    """Tests for namecheap.domains.getInfo."""

    INFO_BODY = '''
    <DomainGetInfoResult Status="Ok" ID="57582" DomainName="example.com" OwnerName="anUser"
        IsOwner="true" IsPremium="false">
      <DomainDetails>
        <CreatedDate>11/04/2014</CreatedDate>
        <ExpiredDate>11/04/2015</ExpiredDate>
        <NumYears>0</NumYears>
      </DomainDetails>
      <LockDetails />
      <Whoisguard Enabled="True" />
      <DnsDetails ProviderType="CUSTOM" IsUsingOurDNS="false" HostCount="2" EmailType="FWD">
        <Nameserver>ns1.example.net</Nameserver>
        <Nameserver>ns2.example.net</Nameserver>
      </DnsDetails>
    </DomainGetInfoResult>
    '''

    def test_parse_info(self):
        info = XMLParser.parse_domain_info(envelope("namecheap.domains.getInfo", self.INFO_BODY))
        assert info.id == 57582
        assert info.domain_name == "example.com"
        assert info.owner_name == "anUser"
        assert info.is_owner is True
        assert info.status == "Ok"
        assert info.created_date == datetime(2014, 11, 4)
        assert info.expired_date == datetime(2015, 11, 4)
        assert info.dns_provider_type == "CUSTOM"
        assert info.nameservers == ["ns1.example.net", "ns2.example.net"]

    def test_missing_details_use_defaults(self):
        body = '<DomainGetInfoResult ID="1" DomainName="example.com" />'
        info = XMLParser.parse_domain_info(envelope("namecheap.domains.getInfo", body))
        assert info.created_date is None
        assert info.nameservers == []
        assert info.dns_provider_type == ""

    def test_invalid_date_raises_xml_error(self):
        body = '''
        <DomainGetInfoResult ID="1" DomainName="example.com">
          <DomainDetails><CreatedDate>2014-13-45</CreatedDate></DomainDetails>
        </DomainGetInfoResult>
        '''
        with pytest.raises(NamecheapXMLError):
            XMLParser.parse_domain_info(envelope("namecheap.domains.getInfo", body))


class TestParseDomainList:
    """Tests for namecheap.domains.getList."""

    LIST_BODY = '''
    <DomainGetListResult>
      <Domain ID="127" Name="example.com" User="owner" Created="02/15/2016" Expires="02/15/2022"
          IsExpired="false" IsLocked="true" AutoRenew="false" WhoisGuard="ENABLED" IsPremium="false"
          IsOurDNS="true" />
      <Domain ID="381" Name="example.net" User="owner" Created="04/28/2016" Expires="04/28/2023"
          IsExpired="false" IsLocked="false" AutoRenew="true" WhoisGuard="NOTPRESENT" IsPremium="false"
          IsOurDNS="false" />
    </DomainGetListResult>
    <Paging>
      <TotalItems>12</TotalItems>
      <CurrentPage>1</CurrentPage>
      <PageSize>20</PageSize>
    </Paging>
    '''

    def test_parse_list(self):
        result = XMLParser.parse_domain_list(envelope("namecheap.domains.getList", self.LIST_BODY))

        assert [d.name for d in result.domains] == ["example.com", "example.net"]
        first = result.domains[0]
        assert first.id == 127
        assert first.created == datetime(2016, 2, 15)
        assert first.expires == datetime(2022, 2, 15)
        assert first.is_locked is True
        assert first.is_our_dns is True
        assert first.whois_guard == "ENABLED"
        assert result.domains[1].auto_renew is True

        assert result.total_items == 12
        assert result.current_page == 1
        assert result.page_size == 20

    def test_paging_is_optional(self):
        body = "<DomainGetListResult />"
        result = XMLParser.parse_domain_list(envelope("namecheap.domains.getList", body))
        assert result.domains == []
        assert result.total_items == 0


class TestParseDomainContacts:
    """Tests for namecheap.domains.getContacts and setContacts."""

    CONTACTS_BODY = '''
    <DomainContactsResult Domain="example.com" domainnameid="3152456">
      <Registrant ReadOnly="false">
        <OrganizationName>NameCheap.com</OrganizationName>
        <JobTitle>Software Developer</JobTitle>
        <FirstName>John</FirstName>
        <LastName>Smith</LastName>
        <Address1>8939 S.cross Blvd</Address1>
        <Address2>ca 110-708</Address2>
        <City>CA</City>
        <StateProvince>CA</StateProvince>
        <StateProvinceChoice>S</StateProvinceChoice>
        <PostalCode>90045</PostalCode>
        <Country>US</Country>
        <Phone>+1.6613102107</Phone>
        <Fax>+1.6613102107</Fax>
        <EmailAddress>john@gmail.com</EmailAddress>
        <PhoneExt />
      </Registrant>
      <Tech ReadOnly="true">
        <FirstName>Jane</FirstName>
        <LastName>Doe</LastName>
      </Tech>
      <Admin ReadOnly="false">
        <FirstName>John</FirstName>
      </Admin>
    </DomainContactsResult>
    '''

    def test_parse_contacts(self):
        result = XMLParser.parse_domain_contacts(
            envelope("namecheap.domains.getContacts", self.CONTACTS_BODY)
        )
        assert result.domain == "example.com"
        assert result.domain_name_id == 3152456

        registrant = result.registrant
        assert registrant.organization_name == "NameCheap.com"
        assert registrant.first_name == "John"
        assert registrant.postal_code == "90045"
        assert registrant.email_address == "john@gmail.com"
        assert registrant.phone_ext is None
        assert registrant.read_only is False

        assert result.tech.first_name == "Jane"
        assert result.tech.read_only is True
        assert result.tech.address1 is None
        assert result.admin.first_name == "John"
        assert result.aux_billing is None

    def test_parse_set_contacts(self):
        body = '<DomainSetContactResult Domain="example.com" IsSuccess="true" />'
        assert XMLParser.parse_domain_set_contacts(envelope("namecheap.domains.setContacts", body)) is True

    def test_parse_set_contacts_failure(self):
        body = '<DomainSetContactResult Domain="example.com" IsSuccess="false" />'
        assert XMLParser.parse_domain_set_contacts(envelope("namecheap.domains.setContacts", body)) is False


class TestParseRegistrarLock:
    """Tests for namecheap.domains.getRegistrarLock and setRegistrarLock."""

    @pytest.mark.parametrize("value, expected", [
        ("true", True),
        ("True", True),
        ("false", False),
        ("FALSE", False),
    ])
    def test_lock_status(self, value, expected):
        body = f'<DomainGetRegistrarLockResult Domain="example.com" RegistrarLockStatus="{value}" />'
        xml = envelope("namecheap.domains.getRegistrarLock", body)
        assert XMLParser.parse_registrar_lock(xml) is expected

    @pytest.mark.parametrize("body", [
        '<DomainGetRegistrarLockResult Domain="example.com" />',
        '<DomainGetRegistrarLockResult Domain="example.com" RegistrarLockStatus="maybe" />',
    ])
    def test_lock_status_is_mandatory(self, body):
        with pytest.raises(NamecheapResponseError):
            XMLParser.parse_registrar_lock(envelope("namecheap.domains.getRegistrarLock", body))

    def test_set_lock(self):
        body = '<DomainSetRegistrarLockResult Domain="example.com" IsSuccess="true" />'
        assert XMLParser.parse_set_registrar_lock(envelope("namecheap.domains.setRegistrarLock", body)) is True


class TestParseTldList:
    """Tests for namecheap.domains.getTldList."""

    TLD_BODY = '''
    <Tlds>
      <Tld Name="biz" NonRealTime="false" MinRegisterYears="1" MaxRegisterYears="10"
          MinRenewYears="1" MaxRenewYears="10" MinTransferYears="1" MaxTransferYears="10"
          IsApiRegisterable="true" IsApiRenewable="true" IsApiTransferable="false"
          IsEppRequired="false" IsDisableModContact="false" IsDisableWGAllot="false"
          IsIncludeInExtendedSearchOnly="false" SequenceNumber="5" Type="GTLD"
          IsSupportsIDN="false" Category="P">US Business</Tld>
      <Tld Name="bz" NonRealTime="false" MinRegisterYears="1" MaxRegisterYears="10"
          Type="CCTLD" Category="A">BZ Country Domain</Tld>
    </Tlds>
    '''

    def test_parse_tlds(self):
        result = XMLParser.parse_tld_list(envelope("namecheap.domains.getTldList", self.TLD_BODY))
        assert result.timestamp is not None
        assert [t.name for t in result.tlds] == ["biz", "bz"]

        biz = result.tlds[0]
        assert biz.description == "US Business"
        assert biz.max_register_years == 10
        assert biz.is_api_registerable is True
        assert biz.is_api_transferable is False
        assert biz.sequence_number == 5
        assert biz.type == "GTLD"
        assert biz.category == "P"

        assert result.tlds[1].type == "CCTLD"
        assert result.tlds[1].min_renew_years == 0


class TestParseRenewReactivate:
    """Tests for namecheap.domains.renew and reActivate."""

    def test_parse_renew(self):
        body = '''
        <DomainRenewResult DomainName="example.com" DomainID="151378" Renew="true" OrderID="23569"
            TransactionID="25080" ChargedAmount="650.0000">
          <DomainDetails>
            <ExpiredDate>11/17/2015 11:42:09 AM</ExpiredDate>
            <NumYears>0</NumYears>
          </DomainDetails>
        </DomainRenewResult>
        '''
        result = XMLParser.parse_domain_renew(envelope("namecheap.domains.renew", body))
        assert result.domain_name == "example.com"
        assert result.domain_id == 151378
        assert result.renewed is True
        assert result.charged_amount == 650.0
        assert result.order_id == 23569
        assert result.expired_date == datetime(2015, 11, 17, 11, 42, 9)

    def test_parse_reactivate(self):
        body = '''
        <DomainReactivateResult Domain="example.com" IsSuccess="true" ChargedAmount="650.0000"
            OrderID="23569" TransactionID="25080" />
        '''
        result = XMLParser.parse_domain_reactivate(envelope("namecheap.domains.reActivate", body))
        assert result.domain == "example.com"
        assert result.is_success is True
        assert result.order_id == 23569
        assert result.transaction_id == 25080


class TestParsePricing:
    """Tests for namecheap.users.getPricing."""

    PRICING_BODY = '''
    <UserGetPricingResult>
      <ProductType Name="DOMAIN">
        <ProductCategory Name="REGISTER">
          <Product Name="com">
            <Price Duration="1" DurationType="YEAR" Price="8.88" RegularPrice="10.98"
                YourPrice="9.58" CouponPrice="" Currency="USD" />
            <Price Duration="2" DurationType="YEAR" Price="19.76" RegularPrice="21.96"
                YourPrice="20.16" Currency="USD" AdditionalCost="0.36" />
          </Product>
        </ProductCategory>
        <ProductCategory Name="RENEW">
          <Product Name="com">
            <Price Duration="1" DurationType="YEAR" Price="11.48" RegularPrice="12.98"
                YourPrice="12.18" Currency="EUR" />
            <Price Duration="6" DurationType="MONTH" Price="6.49" RegularPrice="7.49"
                YourPrice="6.99" Currency="GBP" />
          </Product>
        </ProductCategory>
      </ProductType>
    </UserGetPricingResult>
    '''

    def test_parse_catalog(self):
        result = XMLParser.parse_pricing(envelope("namecheap.users.getPricing", self.PRICING_BODY))

        assert result.product_type == "DOMAIN"
        assert result.timestamp is not None
        assert [a.action_name for a in result.actions] == ["REGISTER", "RENEW"]

        for action in result.actions:
            assert len(action.products) == 1
            assert action.products[0].product_name == "com"

        tiers = [
            (
                action.action_name,
                tier.duration,
                tier.duration_type,
                tier.price,
                tier.regular_price,
                tier.your_price,
                tier.currency,
            )
            for action in result.actions
            for tier in action.products[0].prices
        ]
        assert tiers == [
            ("REGISTER", 1, "YEAR", pytest.approx(8.88), pytest.approx(10.98), pytest.approx(9.58), "USD"),
            ("REGISTER", 2, "YEAR", pytest.approx(19.76), pytest.approx(21.96), pytest.approx(20.16), "USD"),
            ("RENEW", 1, "YEAR", pytest.approx(11.48), pytest.approx(12.98), pytest.approx(12.18), "EUR"),
            ("RENEW", 6, "MONTH", pytest.approx(6.49), pytest.approx(7.49), pytest.approx(6.99), "GBP"),
        ]

        assert result.actions[0].products[0].prices[1].additional_cost == pytest.approx(0.36)
        assert result.actions[0].products[0].prices[0].additional_cost == 0.0

    def test_malformed_tier_is_skipped(self):
        body = '''
        <UserGetPricingResult>
          <ProductType Name="DOMAIN">
            <ProductCategory Name="REGISTER">
              <Product Name="com">
                <Price Duration="1" DurationType="YEAR" Price="abc" RegularPrice="10.98" YourPrice="10.98" />
                <Price Duration="2" DurationType="YEAR" Price="21.96" RegularPrice="21.96" YourPrice="21.96" />
              </Product>
            </ProductCategory>
          </ProductType>
        </UserGetPricingResult>
        '''
        result = XMLParser.parse_pricing(envelope("namecheap.users.getPricing", body))
        prices = result.actions[0].products[0].prices
        assert [p.duration for p in prices] == [2]

    def test_missing_product_type(self):
        body = "<UserGetPricingResult />"
        with pytest.raises(NamecheapResponseError):
            XMLParser.parse_pricing(envelope("namecheap.users.getPricing", body))
