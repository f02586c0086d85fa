"""
=================================================================
 AWS Domain Hosting Stack Cleanup Script (CloudFront/ACM/S3/DNS)
=================================================================

Project Explanation:
--------------------
When a website is served on its own domain (like `www.example.com`) through AWS,
four different services work together:
1. CloudFront, the global 'delivery network' (CDN) that answers visitors.
2. ACM (AWS Certificate Manager), which holds the TLS certificate that makes
   `https://example.com` show the little padlock in the browser.
3. S3, the 'online folder' (bucket) where the website files live.
4. Route 53, the DNS 'phone book' that points `example.com` at CloudFront.

This script takes all of that down again for ONE domain, so you stop paying for it.

Why does the order matter?
--------------------------
AWS will refuse to delete things that are still being used by something else:
- A CloudFront distribution can only be deleted after it is disabled, and the
  change has finished rolling out everywhere ('Deployed' status).
- A certificate can only be deleted once no distribution uses it anymore, so we
  swap the distribution back to the CloudFront default certificate first.
- A bucket can only be deleted when it is completely empty.
- DNS records go last, so the domain keeps resolving until everything behind it is gone.

If any step fails, the script logs what went wrong and stops. Nothing is retried.

What this script does:
----------------------
1. Reads its settings from environment variables (a `.env` file is loaded first).
2. Finds the CloudFront distribution whose alternate domain names include the domain.
3. Asks for your confirmation (can be turned off with CONFIRM_DELETION=false).
4. Disables the distribution and waits until that is deployed.
5. Detaches the ACM certificate from the distribution and waits again.
6. Sends the delete request for the distribution.
7. Deletes the ACM certificate issued for the domain.
8. Empties and deletes the S3 bucket.
9. Deletes the domain's A/AAAA/CNAME records (apex and `www.`) from its hosted zone,
   and optionally the hosted zone itself.
10. Prints a summary of every step.

Settings (environment variables or `.env`):
-------------------------------------------
- DOMAIN_NAME                     The domain to tear down, e.g. `example.com` (required).
- del_bucket                      Name of the S3 bucket to delete (required).
- distributionId                  Use this distribution id instead of searching by alias.
- AWS_ACM_REGION                  Region for CloudFront, ACM and Route 53 (default `us-east-1`).
- AWS_S3_REGION                   Region of the bucket (default: AWS_ACM_REGION).
- POLLING_INTERVAL_SECONDS        How often to check the distribution status (default 30).
- CLOUDFRONT_TIMEOUT_SECONDS      Max time to wait for a distribution change (default 1800).
- WAIT_FOR_DISTRIBUTION_DELETION  Wait until the distribution is really gone (default false).
- DELETE_HOSTED_ZONE              Also delete the hosted zone when it is empty (default false).
- CONFIRM_DELETION                Ask before deleting anything (default true).
- LOG_LEVEL                       Logging level (default INFO).

Requirements:
-------------
- Python 3 installed.
- `boto3` and `python-dotenv` installed (`pip install boto3 python-dotenv`).
- AWS credentials configured (run `aws configure`) with permissions to manage
  CloudFront, ACM, S3 and Route 53.
"""

import boto3
import logging
import os
import time
import sys
from botocore.exceptions import ClientError, WaiterError
from dotenv import load_dotenv
from typing import Optional, Dict, List, Any

# --- Configuration ---

# Load variables from a local .env file (if present) before reading any settings
load_dotenv()

def _log_level(name: str) -> int:
    # getLevelName maps known names to their number and anything else to a "Level x" string
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


# Configure logging
logging.basicConfig(
    level=_log_level(os.getenv("LOG_LEVEL", "INFO")),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# --- Constants ---
DEFAULT_REGION: str = "us-east-1" # CloudFront only accepts ACM certificates from us-east-1
POLLING_INTERVAL_SECONDS: int = 30 # How often to check the distribution status
CLOUDFRONT_TIMEOUT_SECONDS: int = 1800 # Max time to wait for one distribution change (30 mins)
S3_DELETE_BATCH_SIZE: int = 1000 # delete_objects accepts at most 1000 keys per call
DNS_RECORD_TYPES: List[str] = ["A", "AAAA", "CNAME"]
ACM_KEY_TYPES: List[str] = ["RSA_1024", "RSA_2048", "RSA_3072", "RSA_4096", "EC_prime256v1", "EC_secp384r1", "EC_secp521r1"]

STEP_DISTRIBUTION: str = "CloudFront Distribution"
STEP_CERTIFICATE: str = "ACM Certificate"
STEP_BUCKET: str = "S3 Bucket"
STEP_DNS: str = "DNS Records"
STEP_HOSTED_ZONE: str = "Hosted Zone"


# --- Settings ---

def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value.strip())
    except ValueError:
        logger.error(f"Setting {name} must be a whole number of seconds, got '{value}'. Exiting.")
        sys.exit(1)


def _prompt(question: str) -> str:
    try:
        return input(question).strip()
    except EOFError: # No terminal attached (e.g. CI) and the setting is missing
        logger.error("Input stream closed while asking for a required setting. Exiting.")
        sys.exit(1)


def load_settings() -> Dict[str, Any]:
    """
    Reads the cleanup settings from the environment.

    Simple Explanation:
    All the 'knobs' of this script live in environment variables (or in a `.env`
    file next to where you run it). This function collects them in one dictionary
    and fills in sensible defaults for everything that is optional. Required values
    that are missing come back as None; `main()` asks you for them.

    Returns:
        Dict[str, Any]: The settings, keyed by lowercase names.
    """
    acm_region: str = os.getenv("AWS_ACM_REGION") or DEFAULT_REGION
    domain_name: Optional[str] = (os.getenv("DOMAIN_NAME") or "").strip().rstrip(".").lower() or None
    return {
        "domain_name": domain_name,
        "bucket_name": (os.getenv("del_bucket") or "").strip() or None,
        "distribution_id": (os.getenv("distributionId") or "").strip() or None,
        "acm_region": acm_region,
        "s3_region": os.getenv("AWS_S3_REGION") or acm_region,
        "poll_interval": _env_int("POLLING_INTERVAL_SECONDS", POLLING_INTERVAL_SECONDS),
        "cloudfront_timeout": _env_int("CLOUDFRONT_TIMEOUT_SECONDS", CLOUDFRONT_TIMEOUT_SECONDS),
        "wait_for_deletion": _env_flag("WAIT_FOR_DISTRIBUTION_DELETION", False),
        "delete_hosted_zone": _env_flag("DELETE_HOSTED_ZONE", False),
        "confirm": _env_flag("CONFIRM_DELETION", True),
    }


# --- Helper Functions ---

def find_distribution_for_domain(domain_name: str, cf_client: boto3.client) -> Optional[str]:
    """
    Searches for the CloudFront distribution that serves the given domain.

    Simple Explanation:
    Every CloudFront distribution has a list of 'alternate domain names' (aliases),
    which are the nice addresses like `example.com` that visitors type in. This
    function walks through all of your distributions and returns the ID of the
    first one whose alias list contains our domain.

    Args:
        domain_name (str): The domain, e.g. 'example.com'.
        cf_client (boto3.client): An initialized CloudFront client.

    Returns:
        Optional[str]: The distribution ID, or None if nothing matches (or listing fails).
    """
    logger.info(f"Searching for CloudFront distribution with alias: {domain_name}")
    try:
        paginator = cf_client.get_paginator("list_distributions")
        for page in paginator.paginate():
            if "DistributionList" not in page or "Items" not in page["DistributionList"]:
                continue # Skip empty pages or lists

            for dist_summary in page["DistributionList"]["Items"]:
                aliases: List[str] = dist_summary.get("Aliases", {}).get("Items", [])
                if domain_name in [alias.lower() for alias in aliases]:
                    logger.info(f"Found matching distribution: ID={dist_summary['Id']}")
                    return dist_summary["Id"]
    except ClientError as e:
        logger.error(f"Error listing CloudFront distributions: {e}")
        return None

    logger.info(f"CloudFront distribution for domain {domain_name} not found.")
    return None


def confirm_deletion(domain_name: str, bucket_name: str, distribution_id: str) -> bool:
    """
    Asks the user for confirmation before proceeding with deletion.

    Simple Explanation:
    This is the important safety check! It lists everything that is about to be
    deleted and only continues if you type 'yes'.

    Returns:
        bool: True if the user confirms deletion, False otherwise.
    """
    print("\n" + "="*60)
    print("!!! WARNING: RESOURCE DELETION !!!")
    print("="*60)
    print(f"You are about to permanently delete the following AWS resources:")
    print(f"  - CloudFront Distro:  {distribution_id}")
    print(f"  - ACM Certificate:    (issued for {domain_name})")
    print(f"  - S3 Bucket:          {bucket_name}")
    print(f"  - DNS Records:        {domain_name}, www.{domain_name}")
    print("\nTHIS ACTION CANNOT BE UNDONE.")
    print("="*60)

    try:
        confirmation = input("Type 'yes' to confirm deletion: ").strip().lower()
        if confirmation == "yes":
            logger.info("User confirmed deletion.")
            return True
        else:
            logger.warning("Deletion cancelled by user.")
            return False
    except EOFError: # Handle cases where input stream is closed unexpectedly
        logger.warning("Input stream closed. Deletion cancelled.")
        return False


def wait_for_distribution_deployed(
    distribution_id: str,
    cf_client: boto3.client,
    expect_disabled: bool = False,
    poll_interval: int = POLLING_INTERVAL_SECONDS,
    timeout: int = CLOUDFRONT_TIMEOUT_SECONDS,
) -> bool:
    """
    Polls a distribution until its last change has been rolled out everywhere.

    Simple Explanation:
    Changes to CloudFront don't happen instantly: AWS has to copy them to hundreds of
    edge locations around the world. While that happens the status is 'InProgress';
    once it's done it becomes 'Deployed'. This function keeps asking "Is it done yet?"
    every few seconds until it is, or until we've waited too long.

    Args:
        distribution_id (str): The distribution to watch.
        cf_client (boto3.client): An initialized CloudFront client.
        expect_disabled (bool): Also require the distribution to report Enabled=False.
        poll_interval (int): Seconds between status checks.
        timeout (int): Seconds after which we give up.

    Returns:
        bool: True once deployed, False on timeout or error.
    """
    start_time = time.time()
    while True:
        try:
            get_dist_response = cf_client.get_distribution(Id=distribution_id)
        except ClientError as e:
            logger.error(f"Error checking status for {distribution_id}: {e}")
            return False

        distribution = get_dist_response["Distribution"]
        current_status = distribution["Status"]
        enabled = distribution["DistributionConfig"]["Enabled"]
        elapsed_time = time.time() - start_time

        if current_status == "Deployed" and not (expect_disabled and enabled):
            logger.info(f"✅ Distribution {distribution_id} is deployed (Enabled: {enabled}).")
            return True

        if elapsed_time > timeout:
            logger.error(f"Timeout waiting for CloudFront distribution {distribution_id} to deploy (Status: {current_status}).")
            return False

        logger.info(f"⏳ Distribution {distribution_id} status is '{current_status}'. Waiting... ({int(elapsed_time)}s elapsed)")
        time.sleep(poll_interval)


# --- Deletion Functions ---

def disable_cloudfront_distribution(
    distribution_id: str,
    cf_client: boto3.client,
    poll_interval: int = POLLING_INTERVAL_SECONDS,
    timeout: int = CLOUDFRONT_TIMEOUT_SECONDS,
) -> bool:
    """
    Disables a CloudFront distribution and waits until it is fully disabled.

    Simple Explanation:
    First we tell CloudFront to stop serving the website ('Enabled: False'). To change
    anything we must send back the 'ETag' (a version stamp) we got when reading the
    settings, so AWS knows nobody changed them in between. Then we wait for the change
    to reach every edge location.

    Returns:
        bool: True if the distribution ended up disabled and deployed, False otherwise.
    """
    logger.info(f"--- Step 1: Disabling CloudFront Distribution {distribution_id} ---")
    try:
        get_config_response = cf_client.get_distribution_config(Id=distribution_id)
        dist_config: Dict[str, Any] = get_config_response["DistributionConfig"]
        current_etag: str = get_config_response["ETag"]

        if not dist_config["Enabled"]:
            logger.info(f"Distribution {distribution_id} is already disabled.")
        else:
            dist_config["Enabled"] = False
            update_response = cf_client.update_distribution(
                DistributionConfig=dist_config, Id=distribution_id, IfMatch=current_etag
            )
            logger.info(f"Disable request sent (ETag: {update_response['ETag']}). Waiting for distribution {distribution_id} to be fully disabled ('Deployed' status)...")
    except ClientError as e:
        error_code = e.response["Error"]["Code"]
        if error_code == "NoSuchDistribution":
            logger.error(f"CloudFront distribution {distribution_id} does not exist.")
        elif error_code == "IllegalUpdate":
            logger.error(f"Failed to update {distribution_id}. Another update might be in progress. Error: {e}")
        elif error_code == "InvalidIfMatchVersion":
            logger.error(f"ETag mismatch when trying to disable {distribution_id}. Might indicate a concurrent modification. Error: {e}")
        else:
            logger.error(f"An unexpected error occurred while disabling {distribution_id}: {e}")
        return False

    return wait_for_distribution_deployed(
        distribution_id, cf_client, expect_disabled=True, poll_interval=poll_interval, timeout=timeout
    )


def remove_certificate_from_distribution(
    distribution_id: str,
    cf_client: boto3.client,
    poll_interval: int = POLLING_INTERVAL_SECONDS,
    timeout: int = CLOUDFRONT_TIMEOUT_SECONDS,
) -> bool:
    """
    Switches the distribution back to the default CloudFront certificate.

    Simple Explanation:
    ACM won't delete a certificate that a distribution is still using. So if the
    distribution points at an ACM certificate, we replace it with CloudFront's own
    built-in certificate (the one for `*.cloudfront.net`). The custom domain names
    have to go in the same change, since CloudFront won't serve `example.com` with
    a certificate that doesn't cover it. Then we wait for the change to deploy.

    Returns:
        bool: True if no ACM certificate is attached anymore, False otherwise.
    """
    logger.info(f"--- Step 2: Detaching certificate from CloudFront Distribution {distribution_id} ---")
    try:
        get_config_response = cf_client.get_distribution_config(Id=distribution_id)
        dist_config: Dict[str, Any] = get_config_response["DistributionConfig"]

        viewer_certificate: Dict[str, Any] = dist_config.get("ViewerCertificate") or {}
        if not viewer_certificate.get("ACMCertificateArn"):
            logger.info(f"Distribution {distribution_id} does not use an ACM certificate. Nothing to detach.")
            return True

        logger.info(f"Detaching certificate {viewer_certificate['ACMCertificateArn']}")
        dist_config["ViewerCertificate"] = {"CloudFrontDefaultCertificate": True}
        dist_config["Aliases"] = {"Quantity": 0}
        cf_client.update_distribution(
            DistributionConfig=dist_config, Id=distribution_id, IfMatch=get_config_response["ETag"]
        )
    except ClientError as e:
        logger.error(f"Failed to detach certificate from distribution {distribution_id}: {e}")
        return False

    return wait_for_distribution_deployed(
        distribution_id, cf_client, expect_disabled=True, poll_interval=poll_interval, timeout=timeout
    )


def delete_cloudfront_distribution(
    distribution_id: str,
    cf_client: boto3.client,
    wait: bool = False,
    poll_interval: int = POLLING_INTERVAL_SECONDS,
    timeout: int = CLOUDFRONT_TIMEOUT_SECONDS,
) -> bool:
    """
    Sends the delete request for a (disabled, deployed) distribution.

    By default this doesn't wait for AWS to finish removing it; with ``wait=True``
    it polls until the distribution no longer exists.
    """
    logger.info(f"--- Step 3: Deleting CloudFront Distribution {distribution_id} ---")
    try:
        # Deleting needs the very latest ETag, which changed with every update above
        latest_etag: str = cf_client.get_distribution_config(Id=distribution_id)["ETag"]
        cf_client.delete_distribution(Id=distribution_id, IfMatch=latest_etag)
        logger.info(f"Delete request sent for {distribution_id} (using ETag: {latest_etag}).")
    except ClientError as e:
        error_code = e.response["Error"]["Code"]
        if error_code == "NoSuchDistribution":
            logger.warning(f"CloudFront distribution {distribution_id} seems to be already deleted or does not exist.")
            return True # Treat as success if it's already gone
        elif error_code == "DistributionNotDisabled":
            logger.error(f"Failed to delete {distribution_id} because it reported as not disabled properly.")
        elif error_code == "InvalidIfMatchVersion":
            logger.error(f"ETag mismatch when trying to delete {distribution_id}. Might indicate a concurrent modification. Error: {e}")
        else:
            logger.error(f"An unexpected error occurred while deleting {distribution_id}: {e}")
        return False

    if not wait:
        return True

    delete_start_time = time.time()
    while True:
        try:
            cf_client.get_distribution(Id=distribution_id)
            # If the above call succeeds, it still exists
            elapsed_time = time.time() - delete_start_time
            if elapsed_time > timeout:
                logger.error(f"Timeout waiting for CloudFront distribution {distribution_id} to be deleted.")
                return False
            logger.info(f"⏳ Distribution {distribution_id} still exists. Waiting for deletion... ({int(elapsed_time)}s elapsed)")
            time.sleep(poll_interval)
        except ClientError as e:
            if e.response["Error"]["Code"] == "NoSuchDistribution":
                logger.info(f"✅ CloudFront distribution {distribution_id} successfully deleted.")
                return True
            logger.error(f"Error checking deletion status for {distribution_id}: {e}")
            return False


def delete_ssl_certificate(domain_name: str, acm_client: boto3.client) -> bool:
    """
    Deletes the ACM certificate that was issued for the domain.

    Simple Explanation:
    Looks through all certificates in the ACM region and deletes the one whose main
    domain name is exactly our domain. If there is none, that's reported as a failure
    so the script stops and you can have a look.

    Args:
        domain_name (str): The domain the certificate was issued for.
        acm_client (boto3.client): An initialized ACM client (in the certificate's region).

    Returns:
        bool: True if the certificate was deleted, False otherwise.
    """
    logger.info(f"--- Step 4: Deleting ACM certificate for {domain_name} ---")
    certificate_arn: Optional[str] = None
    try:
        paginator = acm_client.get_paginator("list_certificates")
        for page in paginator.paginate(Includes={"keyTypes": ACM_KEY_TYPES}):
            for cert in page.get("CertificateSummaryList", []):
                if cert.get("DomainName", "").lower() == domain_name:
                    certificate_arn = cert["CertificateArn"]
                    break
            if certificate_arn:
                break

        if not certificate_arn:
            logger.warning(f"Certificate for domain {domain_name} not found.")
            return False

        acm_client.delete_certificate(CertificateArn=certificate_arn)
        logger.info(f"✅ Certificate {certificate_arn} successfully deleted.")
        return True
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceInUseException":
            logger.error(f"Certificate {certificate_arn} is still in use by another AWS resource. Error: {e}")
        else:
            logger.error(f"Error deleting certificate for {domain_name}: {e}")
        return False


def empty_s3_bucket(bucket_name: str, s3_client: boto3.client) -> bool:
    """
    Deletes all objects (including all versions and delete markers) from an S3 bucket.

    Simple Explanation:
    Imagine the S3 bucket is a box full of files. We can't throw away the box until
    it's empty. This function lists *everything* inside the bucket (current files,
    old versions and delete markers) and deletes it in batches of up to 1000.

    Returns:
        bool: True if the bucket was successfully emptied, False otherwise.
    """
    logger.info(f"--- Emptying S3 bucket: {bucket_name} ---")
    objects_to_delete: List[Dict[str, str]] = []
    total_objects_found = 0

    def delete_batch(batch: List[Dict[str, str]]) -> bool:
        logger.info(f"Deleting batch of {len(batch)} items...")
        delete_response = s3_client.delete_objects(
            Bucket=bucket_name, Delete={"Objects": batch, "Quiet": True}
        )
        if delete_response.get("Errors"):
            logger.error(f"Errors encountered deleting objects: {delete_response['Errors']}")
            return False
        return True

    try:
        # Unversioned objects are listed too, with VersionId 'null'
        paginator = s3_client.get_paginator("list_object_versions")
        for page in paginator.paginate(Bucket=bucket_name):
            for item in page.get("Versions", []) + page.get("DeleteMarkers", []):
                logger.debug(f"Deleting object: {item['Key']}")
                objects_to_delete.append({"Key": item["Key"], "VersionId": item["VersionId"]})
                total_objects_found += 1

            while len(objects_to_delete) >= S3_DELETE_BATCH_SIZE:
                batch = objects_to_delete[:S3_DELETE_BATCH_SIZE]
                objects_to_delete = objects_to_delete[S3_DELETE_BATCH_SIZE:]
                if not delete_batch(batch):
                    return False

        if objects_to_delete and not delete_batch(objects_to_delete):
            return False

        logger.info(f"Successfully deleted {total_objects_found} items from bucket {bucket_name}.")
        return True

    except ClientError as e:
        if e.response["Error"]["Code"] == "NoSuchBucket":
            logger.warning(f"Bucket {bucket_name} not found while trying to empty it. Assuming already deleted/emptied.")
            return True
        logger.error(f"Error emptying bucket {bucket_name}: {e}")
        return False


def delete_s3_bucket(bucket_name: str, s3_client: boto3.client) -> bool:
    """
    Empties the bucket, deletes it and waits until AWS confirms it's gone.

    Returns:
        bool: True if the bucket was successfully deleted (or was already gone), False otherwise.
    """
    logger.info(f"--- Step 5: Deleting S3 bucket: {bucket_name} ---")
    if not empty_s3_bucket(bucket_name, s3_client):
        logger.error(f"Failed to empty S3 bucket {bucket_name}. Cannot proceed with bucket deletion.")
        return False

    try:
        s3_client.delete_bucket(Bucket=bucket_name)
        logger.info(f"Delete request sent for bucket {bucket_name}. Waiting for confirmation...")

        waiter = s3_client.get_waiter("bucket_not_exists")
        waiter.wait(
            Bucket=bucket_name,
            WaiterConfig={"Delay": 15, "MaxAttempts": 20} # Wait up to 5 mins
        )
        logger.info(f"✅ S3 bucket {bucket_name} successfully deleted.")
        return True
    except WaiterError as e:
        logger.error(f"Error or timeout waiting for bucket {bucket_name} deletion: {e}")
        return False
    except ClientError as e:
        error_code = e.response["Error"]["Code"]
        if error_code == "NoSuchBucket":
            logger.warning(f"Bucket {bucket_name} seems to be already deleted.")
            return True
        if error_code == "BucketNotEmpty":
            logger.error(f"Deletion of {bucket_name} failed because the bucket is not empty.")
        else:
            logger.error(f"Error deleting bucket {bucket_name}: {e}")
        return False


def find_hosted_zone_id(domain_name: str, route53_client: boto3.client) -> Optional[str]:
    """
    Returns the ID of the public hosted zone named exactly like the domain.

    list_hosted_zones_by_name returns zones in name order *starting at* the given name,
    so the first result is only ours if its name matches.
    """
    try:
        response = route53_client.list_hosted_zones_by_name(DNSName=domain_name, MaxItems="1")
    except ClientError as e:
        logger.error(f"Error looking up hosted zone for {domain_name}: {e}")
        return None

    hosted_zones: List[Dict[str, Any]] = response.get("HostedZones", [])
    if not hosted_zones or hosted_zones[0]["Name"].lower() != f"{domain_name}.":
        logger.warning(f"Hosted zone for domain {domain_name} not found.")
        return None
    return hosted_zones[0]["Id"]


def list_record_sets(hosted_zone_id: str, route53_client: boto3.client) -> List[Dict[str, Any]]:
    record_sets: List[Dict[str, Any]] = []
    paginator = route53_client.get_paginator("list_resource_record_sets")
    for page in paginator.paginate(HostedZoneId=hosted_zone_id):
        record_sets.extend(page.get("ResourceRecordSets", []))
    return record_sets


def delete_dns_records(domain_name: str, route53_client: boto3.client) -> bool:
    """
    Deletes the domain's A, AAAA and CNAME records (apex and `www.`).

    Simple Explanation:
    DNS is the internet's phone book. Our hosted zone has entries saying
    "example.com lives at this CloudFront address" (and the same for www.example.com).
    Now that the website is gone, those entries would point at nothing, so we remove
    them all in a single change. Other records (like email MX records) are left alone.

    Returns:
        bool: True if the records were deleted (or there were none), False otherwise.
    """
    logger.info(f"--- Step 6: Deleting DNS records for {domain_name} ---")
    hosted_zone_id = find_hosted_zone_id(domain_name, route53_client)
    if not hosted_zone_id:
        return False

    target_names: List[str] = [f"{domain_name}.", f"www.{domain_name}."]
    try:
        changes: List[Dict[str, Any]] = [
            {"Action": "DELETE", "ResourceRecordSet": record}
            for record in list_record_sets(hosted_zone_id, route53_client)
            if record["Type"] in DNS_RECORD_TYPES and record["Name"].lower() in target_names
        ]

        if not changes:
            logger.info(f"No matching DNS records found in hosted zone {hosted_zone_id}.")
            return True

        for change in changes:
            logger.info(f"Deleting {change['ResourceRecordSet']['Type']} record: {change['ResourceRecordSet']['Name']}")
        route53_client.change_resource_record_sets(
            HostedZoneId=hosted_zone_id,
            ChangeBatch={"Comment": f"Cleanup of {domain_name}", "Changes": changes},
        )
        logger.info(f"✅ Deleted {len(changes)} DNS records from hosted zone {hosted_zone_id}.")
        return True
    except ClientError as e:
        logger.error(f"Error deleting DNS records for {domain_name}: {e}")
        return False


def delete_hosted_zone(domain_name: str, route53_client: boto3.client) -> bool:
    """
    Deletes the domain's hosted zone, but only if nothing but its own NS and SOA
    records are left in it.
    """
    logger.info(f"--- Step 7: Deleting hosted zone for {domain_name} ---")
    hosted_zone_id = find_hosted_zone_id(domain_name, route53_client)
    if not hosted_zone_id:
        return False

    try:
        remaining: List[Dict[str, Any]] = [
            record for record in list_record_sets(hosted_zone_id, route53_client)
            if not (record["Type"] in ("NS", "SOA") and record["Name"].lower() == f"{domain_name}.")
        ]
        if remaining:
            logger.warning(f"Hosted zone {hosted_zone_id} still has {len(remaining)} other records. Leaving it in place.")
            for record in remaining:
                logger.warning(f"  - {record['Type']} {record['Name']}")
            return False

        route53_client.delete_hosted_zone(Id=hosted_zone_id)
        logger.info(f"✅ Hosted zone {hosted_zone_id} successfully deleted.")
        return True
    except ClientError as e:
        logger.error(f"Error deleting hosted zone {hosted_zone_id}: {e}")
        return False


# --- Main Orchestration ---

def teardown_stack(
    settings: Dict[str, Any],
    distribution_id: str,
    cf_client: boto3.client,
    acm_client: boto3.client,
    s3_client: boto3.client,
    route53_client: boto3.client,
) -> Dict[str, Optional[bool]]:
    """
    Runs the deletion steps in order and stops at the first one that fails.

    Returns:
        Dict[str, Optional[bool]]: Outcome per step; None means the step was never attempted.
    """
    results: Dict[str, Optional[bool]] = {
        STEP_DISTRIBUTION: None,
        STEP_CERTIFICATE: None,
        STEP_BUCKET: None,
        STEP_DNS: None,
    }
    if settings["delete_hosted_zone"]:
        results[STEP_HOSTED_ZONE] = None

    domain_name: str = settings["domain_name"]
    wait_args = {"poll_interval": settings["poll_interval"], "timeout": settings["cloudfront_timeout"]}

    results[STEP_DISTRIBUTION] = (
        disable_cloudfront_distribution(distribution_id, cf_client, **wait_args)
        and remove_certificate_from_distribution(distribution_id, cf_client, **wait_args)
        and delete_cloudfront_distribution(
            distribution_id, cf_client, wait=settings["wait_for_deletion"], **wait_args
        )
    )
    if not results[STEP_DISTRIBUTION]:
        logger.error(f"CloudFront distribution {distribution_id} teardown failed. Stopping cleanup.")
        return results

    results[STEP_CERTIFICATE] = delete_ssl_certificate(domain_name, acm_client)
    if not results[STEP_CERTIFICATE]:
        return results

    results[STEP_BUCKET] = delete_s3_bucket(settings["bucket_name"], s3_client)
    if not results[STEP_BUCKET]:
        return results

    results[STEP_DNS] = delete_dns_records(domain_name, route53_client)
    if not results[STEP_DNS]:
        return results

    if settings["delete_hosted_zone"]:
        results[STEP_HOSTED_ZONE] = delete_hosted_zone(domain_name, route53_client)

    return results


def print_summary(results: Dict[str, Optional[bool]]) -> None:
    print("\n" + "=" * 60)
    print("          CLEANUP SUMMARY")
    print("=" * 60)
    for step, outcome in results.items():
        status = "SKIPPED" if outcome is None else ("DELETED" if outcome else "FAILED")
        print(f" {step:<26} {status}")
    print("=" * 60)


def main() -> None:
    """
    Main function to orchestrate the cleanup process.

    Simple Explanation:
    This is the conductor. It reads the settings (asking you for anything that's
    missing), connects to the four AWS services, finds the distribution, asks for
    your confirmation and then runs the deletion steps in order, stopping at the
    first failure. It finishes with a summary and exits with code 1 on any failure.
    """
    logger.info("=========================================================")
    logger.info(" Starting AWS Domain Hosting Stack Cleanup ")
    logger.info("=========================================================")

    settings = load_settings()

    if not settings["domain_name"]:
        settings["domain_name"] = _prompt("Enter the domain name to tear down (e.g. example.com): ").rstrip(".").lower()
        if not settings["domain_name"]:
            logger.error("No domain name provided. Exiting.")
            sys.exit(1)
    if not settings["bucket_name"]:
        settings["bucket_name"] = _prompt("Enter the name of the S3 bucket to delete: ")
        if not settings["bucket_name"]:
            logger.error("No bucket name provided. Exiting.")
            sys.exit(1)

    logger.info(f"Domain name: {settings['domain_name']}")
    logger.info(f"Bucket name: {settings['bucket_name']}")

    try:
        cf_client: boto3.client = boto3.client("cloudfront", region_name=settings["acm_region"])
        acm_client: boto3.client = boto3.client("acm", region_name=settings["acm_region"])
        s3_client: boto3.client = boto3.client("s3", region_name=settings["s3_region"])
        route53_client: boto3.client = boto3.client("route53", region_name=settings["acm_region"])
    except Exception as e:
        logger.error(f"Failed to initialize AWS clients. Check credentials and boto3 installation. Error: {e}")
        sys.exit(1)

    distribution_id: Optional[str] = settings["distribution_id"]
    if distribution_id:
        logger.info(f"Using configured distribution ID: {distribution_id}")
    else:
        distribution_id = find_distribution_for_domain(settings["domain_name"], cf_client)
    if not distribution_id:
        logger.error("Nothing to clean up without a CloudFront distribution. Exiting.")
        sys.exit(1)

    if settings["confirm"] and not confirm_deletion(settings["domain_name"], settings["bucket_name"], distribution_id):
        sys.exit(0) # Exit gracefully if user cancels

    results = teardown_stack(settings, distribution_id, cf_client, acm_client, s3_client, route53_client)
    print_summary(results)

    if all(results.values()):
        logger.info("Cleanup process completed successfully.")
    else:
        logger.error("Cleanup process finished with errors. Please review logs.")
        sys.exit(1)


def run() -> None:
    try:
        main()
    except KeyboardInterrupt:
        print("Aborted by user. Exiting.")
        sys.exit(130)


if __name__ == "__main__":
    run()
